"""Reduction operators over the reactions of a Pathway.

Every operator computes a new reaction sequence from the current one and
replaces it in a single step, returning the number of changes. Reaction ids
are renumbered densely after each operator, so ids taken before a reduction
are not valid after it.
"""
import logging
from collections import defaultdict
from mssilp.pathway import _unique


logger = logging.getLogger(__name__)


def _key(ids):
    return frozenset(ids)


def _split(reactions):
    new_reactions = []
    count = 0
    for rxn in reactions:
        products = _unique(rxn.product)
        if len(products) <= 1:
            new_reactions.append(rxn._replace(product=products))
            continue
        count += 1
        for p in products:
            new_reactions.append((f"{rxn.name}_{p}", rxn.substrate, (p,)))
    return new_reactions, count


def _join_duplicates(reactions):
    seen = dict()
    new_reactions = []
    for rxn in reactions:
        key = (_key(rxn.substrate), _key(rxn.product))
        if key in seen:
            logger.debug("Removing %s, duplicate of %s", rxn, seen[key])
            continue
        seen[key] = rxn
        new_reactions.append(rxn)
    return new_reactions, len(reactions) - len(new_reactions)


def _join_dominated(reactions, same, subset):
    # Remove a reaction when another one shares the `same` side and the
    # `subset` function holds strictly between them.
    groups = defaultdict(list)
    for rxn in reactions:
        groups[_key(same(rxn))].append(rxn)
    new_reactions = []
    for rxn in reactions:
        dominator = next((other for other in groups[_key(same(rxn))]
                          if subset(rxn, other)), None)
        if dominator is not None:
            logger.debug("Removing %s, dominated by %s", rxn, dominator)
        else:
            new_reactions.append(rxn)
    return new_reactions, len(reactions) - len(new_reactions)


def _join_dominated_product(reactions):
    return _join_dominated(
        reactions,
        lambda r: r.substrate,
        lambda r, other: _key(r.product) < _key(other.product)
    )


def _join_dominated_substrate(reactions):
    return _join_dominated(
        reactions,
        lambda r: r.product,
        lambda r, other: _key(other.substrate) < _key(r.substrate)
    )


def _merge(reactions):
    groups = defaultdict(list)
    for rxn in reactions:
        groups[_key(rxn.substrate)].append(rxn.id)
    used = set()
    new_reactions = []
    count = 0
    for rxn in reactions:
        if rxn.id in used:
            continue
        used.add(rxn.id)
        partner = next((j for j in groups[_key(rxn.substrate)] if j not in used), None)
        if partner is None:
            new_reactions.append(rxn)
            continue
        used.add(partner)
        other = reactions[partner]
        merged = ("merged", rxn.substrate, _unique(rxn.product + other.product))
        logger.debug("Merging %s and %s into %s", rxn, other, merged)
        new_reactions.append(merged)
        count += 1
    return new_reactions, count


def _apply(pathway, operator):
    new_reactions, count = operator(pathway.reactions)
    pathway.replace_reactions(new_reactions)
    return count


def split_multiple_product(pathway):
    """Split every reaction with more than one product.

    A reaction with n > 1 distinct products is replaced by n reactions with
    the same substrate and a single product each, named `{name}_{product}`.
    Reactions with zero or one product are kept as they are.

    Args:
        pathway (Pathway): Pathway to modify in place.

    Returns:
        int: Number of original reactions that were split.
    """
    return _apply(pathway, _split)


def join_duplicates(pathway):
    """Keep a single reaction for each (substrate set, product set) pair.

    The first reaction of each class is the one kept.

    Returns:
        int: Number of removed reactions.
    """
    return _apply(pathway, _join_duplicates)


def join_dominated_product(pathway):
    """Remove p-dominated reactions.

    A reaction is p-dominated if another reaction with the same substrate
    set produces a strict superset of its products.

    Returns:
        int: Number of removed reactions.
    """
    return _apply(pathway, _join_dominated_product)


def join_dominated_substrate(pathway):
    """Remove s-dominated reactions.

    A reaction is s-dominated if another reaction with the same product set
    requires a strict subset of its substrate.

    Returns:
        int: Number of removed reactions.
    """
    return _apply(pathway, _join_dominated_substrate)


def merge_reactions(pathway):
    """Merge pairs of reactions with the same substrate set.

    Reactions are visited in id order; each unmerged reaction is paired with
    the lowest-id unmerged reaction sharing its substrate set, and both are
    replaced by a reaction named `merged` producing the union of their
    products. Reactions left without a partner are kept.

    Returns:
        int: Number of merged pairs.
    """
    return _apply(pathway, _merge)


REDUCTIONS = {
    'd': join_duplicates,
    'P': join_dominated_product,
    'S': join_dominated_substrate,
    'm': merge_reactions
}


def reduce_pathway(pathway, operators="dPS", max_passes=None):
    """Apply reduction operators until the pathway does not change.

    Example:
        ```python
        >>> from mssilp.reduction import split_multiple_product, reduce_pathway
        >>> split_multiple_product(pathway)
        >>> reduce_pathway(pathway, "dPSm")
        [12, 3, 0]
        ```

    Args:
        pathway (Pathway): Pathway to reduce in place.
        operators (str, optional): Sequence of operator codes applied in each
            pass: 'd' (join_duplicates), 'P' (join_dominated_product), 'S'
            (join_dominated_substrate) and 'm' (merge_reactions). Unknown codes
            are ignored. Defaults to "dPS".
        max_passes (int, optional): Stop after this number of passes even if
            the last one changed the pathway. Defaults to None (no limit).

    Returns:
        list: Total number of changes of each pass. The last value is 0
            unless `max_passes` was reached.
    """
    for code in operators:
        if code not in REDUCTIONS:
            logger.warning("Ignoring unknown reduction operator %r", code)
    totals = []
    while max_passes is None or len(totals) < max_passes:
        total = 0
        for code in operators:
            if code in REDUCTIONS:
                count = REDUCTIONS[code](pathway)
                logger.info("%s: %d changes", REDUCTIONS[code].__name__, count)
                total += count
        totals.append(total)
        logger.info("Reduction pass #%d: %d changes, %d reactions left",
                    len(totals), total, pathway.num_reactions)
        if total == 0:
            break
    return totals
