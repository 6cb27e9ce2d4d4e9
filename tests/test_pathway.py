import io
import json
import pytest
from mssilp.pathway import Pathway, Reaction, index_pathway
from mssilp.pwio import (
    load_pathway,
    parse_readable,
    parse_pddl,
    export_pathway,
    read_solution
)
from mssilp.errors import MalformedInputError
from conftest import MODELS, make_pathway


def test_add_compounds_and_reactions():
    p = Pathway()
    assert p.add_compound("A") == 0
    assert p.add_compound("B") == 1
    assert p.add_reaction("R0", [0], [1]) == 0
    assert p.num_compounds == 2
    assert p.num_reactions == 1
    assert p.reactions[0] == Reaction(0, "R0", (0,), (1,))
    assert p.get_compound_id("B") == 1
    assert p.find_compound("Z") is None


def test_reaction_with_invalid_compound():
    p = make_pathway(2, [])
    with pytest.raises(MalformedInputError):
        p.add_reaction("R0", [0], [2])
    with pytest.raises(MalformedInputError):
        p.add_reaction("R0", [-1], [1])
    assert p.num_reactions == 0


def test_unknown_compound_name():
    with pytest.raises(MalformedInputError):
        make_pathway(1, []).get_compound_id("C7")


def test_duplicated_compound_name():
    p = make_pathway(1, [])
    with pytest.raises(MalformedInputError):
        p.add_compound("C0")


def test_replace_reactions_renumbers():
    p = make_pathway(3, [([0], [1]), ([1], [2]), ([2], [0])])
    p.replace_reactions([p.reactions[2], ("new", [0], [2])])
    assert [r.id for r in p.reactions] == [0, 1]
    assert p.reactions[0].name == "R2"
    assert p.reactions[1] == Reaction(1, "new", (0,), (2,))


def test_find_reaction():
    p = make_pathway(2, [([0], [1]), ([1], [0])])
    assert p.find_reaction(1).name == "R1"
    assert p.find_reaction("R0").id == 0
    with pytest.raises(ValueError):
        p.find_reaction("R9")


def test_index_pathway():
    p = make_pathway(3, [([0, 0], [1, 2]), ([1], [2, 2])])
    index = index_pathway(p)
    assert index.producers == [[], [0], [0, 1]]
    assert index.requires == [(0,), (1,)]
    assert index.produces == [(1, 2), (2,)]


def test_load_readable(example):
    assert example.num_compounds == 6
    assert example.num_reactions == 6
    assert [c.name for c in example.compounds] == ["A", "B", "C", "D", "E", "F"]
    r3 = example.find_reaction("R3")
    assert r3.substrate == (1, 2)
    assert r3.product == (3,)


def test_readable_truncated():
    text = "2\nA\nB\n1\nR1\n1\nA\n2\nB\n"
    with pytest.raises(MalformedInputError):
        parse_readable(text)


def test_readable_missing_reactions():
    with pytest.raises(MalformedInputError):
        parse_readable("3\nA\nB\n")


def test_readable_unknown_compound():
    text = "2\nA\nB\n1\nR1\n1\nA\n1\nZ\n"
    with pytest.raises(MalformedInputError):
        parse_readable(text)


def test_readable_invalid_count():
    with pytest.raises(MalformedInputError):
        parse_readable("two\nA\nB\n")


def test_load_pddl():
    p = load_pathway(str(MODELS.joinpath("example_c4r2.pddl")))
    assert [c.name for c in p.compounds] == ["C1", "C2", "C3", "C4"]
    assert p.reactions[0] == Reaction(0, "R1", (0,), (1, 2))
    assert p.reactions[1] == Reaction(1, "R2", (1,), (3,))


def test_pddl_without_actions():
    with pytest.raises(MalformedInputError):
        parse_pddl("(define (domain empty))\n")


def test_load_from_file_object():
    f = io.StringIO("2\nA\nB\n1\nR1\n1\nA\n1\nB\n")
    p = load_pathway(f, input_type='readable')
    assert p.num_reactions == 1


def test_load_unknown_extension():
    with pytest.raises(ValueError):
        load_pathway("network.xyz")


def test_export_and_load_json(example, tmp_path):
    path = tmp_path / "example.json"
    export_pathway(example, path)
    data = json.loads(path.read_text())
    assert data["reactions"][2] == dict(id=2, name="R3", substrate=[1, 2], product=[3])
    p = load_pathway(str(path))
    assert p.compounds == example.compounds
    assert p.reactions == example.reactions


def test_json_with_invalid_reference():
    data = dict(compounds=[dict(id=0, name="A")],
                reactions=[dict(id=0, name="R0", substrate=[0], product=[3])])
    with pytest.raises(MalformedInputError):
        Pathway.from_dict(data)


def test_json_missing_section():
    with pytest.raises(MalformedInputError):
        load_pathway(io.StringIO('{"compounds": []}'), input_type='json')


def test_read_solution():
    values = read_solution(str(MODELS.joinpath("example_c6r6.sol")))
    assert len(values) == 8
    assert values["x0"] == 1.0
    assert values["x2"] == 0.0
    assert values["tm0"] == 1.0


def test_read_invalid_solution(tmp_path):
    path = tmp_path / "invalid.sol"
    path.write_text("<CPLEXSolution><header/></CPLEXSolution>")
    with pytest.raises(MalformedInputError):
        read_solution(str(path))
