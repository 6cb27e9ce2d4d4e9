from typing import NamedTuple
from numbers import Number
from mssilp.errors import MalformedInputError


Compound = NamedTuple(
    "Compound", [
        ("id", int),
        ("name", str)
    ])

Reaction = NamedTuple(
    "Reaction", [
        ("id", int),
        ("name", str),
        ("substrate", tuple),
        ("product", tuple)
    ])

PathwayIndex = NamedTuple(
    "PathwayIndex", [
        ("producers", list),
        ("requires", list),
        ("produces", list)
    ])


def _unique(ids):
    # Keeps the first occurrence of each id
    return tuple(dict.fromkeys(ids))


class Pathway:
    """A minimal class to store a reaction network as a bipartite graph.

    Compound ids are assigned densely when the compound is added and never
    change. Reaction ids are dense too, but every call to `replace_reactions`
    (used by the reduction operators) renumbers them.

    Attributes:
        compounds (tuple): Compound records, the position is the id.
        reactions (tuple): Reaction records, the position is the id.
            Substrate and product are tuples of compound ids.
    """
    def __init__(self, compounds=None, reactions=None):
        self._compounds = []
        self._reactions = []
        self._names = dict()
        for name in compounds or []:
            self.add_compound(name)
        if reactions is not None:
            self.replace_reactions(reactions)

    @property
    def compounds(self):
        return tuple(self._compounds)

    @property
    def reactions(self):
        return tuple(self._reactions)

    @property
    def num_compounds(self):
        """Number of compounds in the pathway.

        Returns:
            int: Number of compounds
        """
        return len(self._compounds)

    @property
    def num_reactions(self):
        """Number of reactions in the pathway.

        Returns:
            int: Number of reactions
        """
        return len(self._reactions)

    def add_compound(self, name):
        """Add a new compound and return its id.

        Args:
            name (str): Name of the compound, as read from the input file.

        Returns:
            int: id assigned to the compound.
        """
        if name in self._names:
            raise MalformedInputError(f"Compound {name} already exists")
        cid = len(self._compounds)
        self._compounds.append(Compound(cid, name))
        self._names[name] = cid
        return cid

    def find_compound(self, name):
        """Find a compound by name, returning its id or None."""
        return self._names.get(name)

    def get_compound_id(self, name):
        cid = self.find_compound(name)
        if cid is None:
            raise MalformedInputError(f"Cannot find compound {name}")
        return cid

    def _check_ids(self, name, ids):
        for i in ids:
            if not isinstance(i, Number) or i < 0 or i >= len(self._compounds):
                raise MalformedInputError(f"Reaction {name} references compound {i}, "
                                          f"but only {len(self._compounds)} compounds exist")
        return tuple(int(i) for i in ids)

    def add_reaction(self, name, substrate, product):
        """Append a reaction to the pathway.

        Args:
            name (str): Name of the reaction (informational).
            substrate (list): ids of the consumed compounds.
            product (list): ids of the produced compounds.

        Returns:
            int: id of the new reaction.
        """
        rid = len(self._reactions)
        self._reactions.append(Reaction(rid, name,
                                        self._check_ids(name, substrate),
                                        self._check_ids(name, product)))
        return rid

    def replace_reactions(self, reactions):
        """Replace the whole reaction sequence.

        Reactions are renumbered from 0 in the given order. Either Reaction
        records or (name, substrate, product) tuples are accepted.
        """
        new_reactions = []
        for rid, rxn in enumerate(reactions):
            if isinstance(rxn, Reaction):
                name, substrate, product = rxn.name, rxn.substrate, rxn.product
            else:
                name, substrate, product = rxn
            new_reactions.append(Reaction(rid, name,
                                          self._check_ids(name, substrate),
                                          self._check_ids(name, product)))
        self._reactions = new_reactions

    def find_reaction(self, rxn_id):
        """Find a reaction by id or by name.

        Args:
            rxn_id (int/str): id or name of the reaction

        Returns:
            Reaction: The reaction record.
        """
        if isinstance(rxn_id, Number):
            return self._reactions[rxn_id]
        for r in self._reactions:
            if r.name == rxn_id:
                return r
        raise ValueError(f"Cannot find reaction {rxn_id}")

    def to_dict(self):
        return {
            "compounds": [dict(id=c.id, name=c.name) for c in self._compounds],
            "reactions": [dict(id=r.id, name=r.name,
                               substrate=list(r.substrate),
                               product=list(r.product)) for r in self._reactions]
        }

    @staticmethod
    def from_dict(data):
        try:
            compounds = sorted(data["compounds"], key=lambda c: c["id"])
            reactions = sorted(data["reactions"], key=lambda r: r["id"])
            pathway = Pathway()
            for i, c in enumerate(compounds):
                if c["id"] != i:
                    raise MalformedInputError(f"Compound ids are not dense (found {c['id']}, expected {i})")
                pathway.add_compound(c["name"])
            pathway.replace_reactions([(r["name"], r["substrate"], r["product"]) for r in reactions])
        except (KeyError, TypeError) as e:
            raise MalformedInputError(f"Invalid pathway snapshot: missing {e}") from e
        return pathway

    def __repr__(self):
        return f"Pathway(compounds={self.num_compounds}, reactions={self.num_reactions})"


def index_pathway(pathway):
    """Build the adjacency lists shared by the model compilers and the checker.

    Args:
        pathway (Pathway): A Pathway instance.

    Returns:
        PathwayIndex: `producers[i]` has the ids of the reactions producing
            compound i, `requires[j]` and `produces[j]` the distinct substrate
            and product ids of reaction j.
    """
    producers = [[] for _ in range(pathway.num_compounds)]
    requires, produces = [], []
    for rxn in pathway.reactions:
        products = _unique(rxn.product)
        for p in products:
            producers[p].append(rxn.id)
        requires.append(_unique(rxn.substrate))
        produces.append(products)
    return PathwayIndex(producers, requires, produces)
