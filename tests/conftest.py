import pathlib
import pytest
from mssilp.pathway import Pathway
from mssilp.pwio import load_pathway


MODELS = pathlib.Path(__file__).parent.joinpath("models")


def make_pathway(num_compounds, reactions):
    """Pathway with compounds C0..Cn-1 and reactions given as (substrate, product)."""
    return Pathway(
        compounds=[f"C{i}" for i in range(num_compounds)],
        reactions=[(f"R{j}", s, p) for j, (s, p) in enumerate(reactions)]
    )


def copy_pathway(pathway):
    return Pathway.from_dict(pathway.to_dict())


@pytest.fixture()
def example():
    # A -> B -> C, {B, C} -> D -> A and a second cycle E <-> F
    return load_pathway(str(MODELS.joinpath("example_c6r6.read")))


@pytest.fixture()
def chain():
    # C0 -> C1 -> C2 -> C3 -> C4
    return make_pathway(5, [([i], [i + 1]) for i in range(4)])
