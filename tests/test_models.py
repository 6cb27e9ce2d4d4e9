from mssilp.models import (
    load,
    Solvers,
    Formulation,
    BaseModel,
    PythonMipModel,
    PicosModel,
    build_bigm_model,
    build_pairwise_model
)
import itertools
import pytest
from mssilp.checker import check_seeds
from mssilp.errors import UnsupportedShapeError, MalformedInputError
from mssilp.reduction import split_multiple_product
from mssilp.pathway import Pathway
from conftest import make_pathway

FORMULATIONS = [
    (Formulation.BIGM, 10),
    (Formulation.TIMESET, 10),
    (Formulation.PAIRWISE, 10)
]


@pytest.fixture(params=[PythonMipModel, PicosModel])
def backend(request):
    # Get the different implementations and return a
    # function to instantiate them for a given pathway
    impl = request.param
    solver = 'cbc' if impl == PythonMipModel else 'glpk'
    return lambda pathway: impl(pathway=pathway, solver_name=solver)


def build(model, formulation, bound):
    return getattr(model, formulation.value)(bound)


def test_load_selects_backend(example):
    assert isinstance(load(example), PythonMipModel)
    assert isinstance(load(example, solver=Solvers.GLPK), PicosModel)
    assert isinstance(load(example, solver='scip'), PicosModel)


@pytest.mark.parametrize("formulation,bound", FORMULATIONS)
def test_minimal_seed_set(backend, example, formulation, bound):
    model = build(backend(example), formulation, bound).solve()
    assert model.is_feasible()
    assert model.get_solver_status()["objective_value"] == pytest.approx(2)
    seeds = model.get_seeds()
    assert len(seeds) == 2
    assert check_seeds(example, seeds).reachable


@pytest.mark.parametrize("formulation,bound", FORMULATIONS)
def test_agrees_with_checker(backend, example, formulation, bound):
    for n in range(3):
        for seeds in itertools.combinations(range(example.num_compounds), n):
            model = build(backend(example), formulation, bound).fix_seeds(seeds).solve()
            assert model.is_feasible() == check_seeds(example, seeds).reachable, seeds


@pytest.mark.parametrize("formulation,small,large", [
    (Formulation.BIGM, 2, 10),
    (Formulation.TIMESET, 3, 5),
    (Formulation.PAIRWISE, 2, 10)
])
def test_undersized_bound(backend, chain, formulation, small, large):
    # The seed C0 reaches the whole chain, but needs 4 steps
    assert check_seeds(chain, [0]).reachable
    model = build(backend(chain), formulation, small).fix_seeds([0]).solve()
    assert not model.is_feasible()
    model = build(backend(chain), formulation, large).fix_seeds([0]).solve()
    assert model.is_feasible()
    assert model.get_seeds() == [0]


@pytest.mark.parametrize("formulation", [Formulation.TIMESET, Formulation.PAIRWISE])
def test_multiple_product_reactions(backend, formulation):
    p = make_pathway(4, [([0], [1, 2]), ([1, 2], [3])])
    model = build(backend(p), formulation, 5).solve()
    assert model.get_seeds() == [0]


def test_bigm_requires_single_product():
    p = make_pathway(4, [([0], [1]), ([1], [2, 3])])
    with pytest.raises(UnsupportedShapeError) as e:
        build_bigm_model(p, 10)
    assert e.value.reaction_id == 1
    split_multiple_product(p)
    assert build_bigm_model(p, 10).solve().get_seeds() == [0]


def test_variable_names(example):
    values = build_bigm_model(example, 10).solve().get_values()
    assert {"x0", "tm5", "u0", "tr5"} <= set(values)
    values = load(example).timeset(4).solve().get_values()
    assert {"x0", "d0_0", "d5_3", "s0_0", "s5_3"} <= set(values)
    values = build_pairwise_model(example, 10).solve().get_values()
    assert {"x0", "t5", "u1_0", "u0_3", "u3_2"} <= set(values)
    assert len([v for v in values if v.startswith("u")]) == 6


def test_num_constraints(example):
    # coverage (6) + ordering (7 substrates) + availability (6 products)
    assert build_bigm_model(example, 10).num_constraints == 19
    # d0 = x, d(T-1) = 1, availability of substrates, propagation
    assert load(example).timeset(4).num_constraints == 2 * 6 + 7 * 4 + 6 * 3
    # ordering (7 substrates) + coverage (6)
    assert build_pairwise_model(example, 10).num_constraints == 13


def test_values_before_solving(backend, example):
    model = backend(example).pairwise(10)
    assert not model.is_feasible()
    assert model.get_values() == dict()
    assert model.get_seeds() == []


def test_invalid_bound(backend, example):
    with pytest.raises(ValueError):
        backend(example).bigm(0)
    with pytest.raises(ValueError):
        backend(example).timeset(-1)


def test_single_formulation(backend, example):
    model = backend(example).pairwise(10)
    with pytest.warns(UserWarning):
        model.bigm(10)
    assert model.formulation == Formulation.PAIRWISE


def test_fix_seeds_without_formulation(backend, example):
    with pytest.raises(ValueError):
        backend(example).fix_seeds([0])


def test_fix_invalid_seeds(backend, example):
    with pytest.raises(MalformedInputError):
        backend(example).pairwise(10).fix_seeds([6])


def test_setup(backend, example):
    model = backend(example).setup(opt_tol=0.05, verbosity=0)
    assert isinstance(model, BaseModel)
    assert model._options["opt_tol"] == 0.05


@pytest.mark.parametrize("formulation,bound", FORMULATIONS)
def test_write_lp(backend, example, formulation, bound, tmp_path):
    path = tmp_path / "model.lp"
    build(backend(example), formulation, bound).write(str(path))
    assert path.exists()
    assert path.stat().st_size > 0


@pytest.mark.parametrize("formulation", list(Formulation))
def test_empty_pathway(backend, formulation):
    model = build(backend(Pathway()), formulation, 1)
    assert model.formulation == formulation
    assert model.num_constraints == 0
    assert model.get_seeds() == []
