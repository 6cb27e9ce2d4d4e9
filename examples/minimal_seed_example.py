import mssilp
from mssilp.reduction import split_multiple_product, reduce_pathway

# Load a pathway in the readable format (use .pddl files for PDDL domains)
pathway = mssilp.load_pathway("tests/models/example_c6r6.read")
print("Compounds:", pathway.num_compounds, "Reactions:", pathway.num_reactions)

# The Big-M model needs single product reactions. Remove duplicate and
# dominated reactions until nothing changes
split_multiple_product(pathway)
print("Changes per pass:", reduce_pathway(pathway, "dPS"))

model = (mssilp
         .load(pathway, solver=mssilp.Solvers.COIN_OR_CBC)
         # Set the MIP Gap tolerance to 1%
         .setup(opt_tol=0.01, verbosity=0)
         # M has to be larger than the longest chain of reactions
         .bigm(pathway.num_reactions + 1)
         .solve(max_seconds=60))
print("Solver status:", model.get_solver_status())

seeds = model.get_seeds()
print("Seeds:", [pathway.compounds[i].name for i in seeds])

# Verify the seeds independently of the model
print("Reachable (iterations):", mssilp.check_seeds(pathway, seeds))
