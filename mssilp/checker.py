import re
import logging
import numpy as np
from typing import NamedTuple
from mssilp.pathway import index_pathway
from mssilp.errors import MalformedInputError


logger = logging.getLogger(__name__)

# Name of the seed indicator variables in a solution report
SEED_VARIABLE = re.compile(r"^x(\d+)$")

Reachability = NamedTuple(
    "Reachability", [
        ("reachable", bool),
        ("iterations", int)
    ])


def seeds_from_values(values, threshold=0.5):
    """Select the seed compounds from a solution report.

    Only the seed indicator variables (`x0`, `x1`, ...) are used. A compound
    is a seed if its indicator value is greater or equal than `threshold`,
    which absorbs the floating point noise of the solvers.

    Args:
        values (dict): Variable names mapped to their values.
        threshold (float, optional): Min value of a selected indicator.
            Defaults to 0.5.

    Returns:
        list: Sorted list of compound ids.
    """
    ids, vals = [], []
    for name, value in values.items():
        match = SEED_VARIABLE.match(name)
        if match is not None and value is not None:
            ids.append(int(match.group(1)))
            vals.append(value)
    ids, vals = np.array(ids, dtype=int), np.array(vals, dtype=float)
    return sorted(ids[vals >= threshold].tolist())


def check_seeds(pathway, seeds):
    """Check whether a set of seeds can produce every compound of the pathway.

    The set of available compounds starts with the seeds. Each iteration
    scans all the reactions and collects the products of those whose
    substrates are all available; the products are added at the end of the
    scan. The search stops when a scan adds nothing or when all the compounds
    are available, so the number of iterations is at most the number of
    reactions + 1.

    Args:
        pathway (Pathway): A Pathway instance.
        seeds (Iterable): ids of the seed compounds.

    Returns:
        Reachability: (reachable, iterations)
    """
    available = set()
    for s in seeds:
        if s < 0 or s >= pathway.num_compounds:
            raise MalformedInputError(f"Seed {s} is not a valid compound id")
        available.add(int(s))
    index = index_pathway(pathway)
    iterations = 0
    while len(available) < pathway.num_compounds:
        to_add = set()
        for substrate, products in zip(index.requires, index.produces):
            if all(s in available for s in substrate):
                to_add.update(p for p in products if p not in available)
        iterations += 1
        if len(to_add) == 0:
            break
        available |= to_add
    reachable = len(available) == pathway.num_compounds
    logger.info("Completed %d iterations, set is %s", iterations,
                "reachable" if reachable else "unreachable")
    return Reachability(reachable, iterations)


def check_solution(pathway, values, threshold=0.5):
    """Same as `check_seeds`, taking the seeds from a solution report.

    See [seeds_from_values][mssilp.checker.seeds_from_values].
    """
    return check_seeds(pathway, seeds_from_values(values, threshold=threshold))
