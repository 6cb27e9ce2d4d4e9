from mssilp.models import (
    load,
    Solvers,
    Formulation,
    build_bigm_model,
    build_timeset_model,
    build_pairwise_model
)

from mssilp.pathway import Pathway, Compound, Reaction, index_pathway
from mssilp.checker import check_seeds, check_solution, seeds_from_values
from mssilp.pwio import load_pathway, export_pathway, read_solution
from mssilp.errors import MssError, MalformedInputError, UnsupportedShapeError

__all__ = ["load", "Solvers", "Formulation", "build_bigm_model", "build_timeset_model",
           "build_pairwise_model", "Pathway", "Compound", "Reaction", "index_pathway",
           "check_seeds", "check_solution", "seeds_from_values", "load_pathway",
           "export_pathway", "read_solution", "MssError", "MalformedInputError",
           "UnsupportedShapeError"]
__version__ = "0.1.0"
