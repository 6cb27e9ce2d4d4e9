import random
import pytest
from mssilp.checker import check_seeds, check_solution, seeds_from_values
from mssilp.pwio import read_solution
from mssilp.errors import MalformedInputError
from conftest import MODELS, make_pathway


def test_single_reaction():
    p = make_pathway(2, [([0], [1])])
    reachable, iterations = check_seeds(p, [0])
    assert reachable
    assert iterations == 1


def test_chain(chain):
    result = check_seeds(chain, {0})
    assert result.reachable
    assert result.iterations == 4
    assert not check_seeds(chain, {1}).reachable


def test_empty_seeds(example):
    result = check_seeds(example, [])
    assert not result.reachable
    assert result.iterations == 1


def test_all_compounds_as_seeds(example):
    assert check_seeds(example, range(example.num_compounds)) == (True, 0)


def test_example_seeds(example):
    assert check_seeds(example, [0, 4]).reachable
    assert check_seeds(example, [3, 5]).reachable
    # C alone cannot fire any reaction
    assert not check_seeds(example, [2, 4]).reachable
    assert not check_seeds(example, [0]).reachable


def test_reaction_without_substrate():
    p = make_pathway(3, [([], [1]), ([1], [2])])
    assert check_seeds(p, [0]) == (True, 2)


def test_invalid_seed(example):
    with pytest.raises(MalformedInputError):
        check_seeds(example, [6])


def test_iterations_bound():
    rng = random.Random(7)
    for _ in range(50):
        n = rng.randint(2, 8)
        reactions = []
        for _ in range(rng.randint(1, 12)):
            substrate = rng.sample(range(n), rng.randint(0, 2))
            product = rng.sample(range(n), rng.randint(1, 2))
            reactions.append((substrate, product))
        p = make_pathway(n, reactions)
        seeds = rng.sample(range(n), rng.randint(0, n))
        assert check_seeds(p, seeds).iterations <= p.num_reactions + 1


def test_seeds_from_values():
    values = {
        "x0": 1.0,
        "x1": 0.9999997,
        "x2": 2e-7,
        "x3": 0.4,
        "x10": 1,
        "tm0": 3.0,
        "u1_0": 1.0,
        "x4_1": 1.0
    }
    assert seeds_from_values(values) == [0, 1, 10]
    assert seeds_from_values(values, threshold=0.3) == [0, 1, 3, 10]
    assert seeds_from_values(dict()) == []


def test_check_solution(example):
    values = read_solution(str(MODELS.joinpath("example_c6r6.sol")))
    assert check_solution(example, values) == (True, 3)
