import mssilp
from mssilp.reduction import split_multiple_product

# Compare the size of the three formulations for the same pathway
pathway = mssilp.load_pathway("tests/models/example_c4r2.pddl")
bound = min(pathway.num_reactions, pathway.num_compounds) + 1

for formulation in mssilp.Formulation:
    if formulation == mssilp.Formulation.BIGM:
        # Multiple product reactions are not supported by the Big-M model
        pathway_copy = mssilp.Pathway.from_dict(pathway.to_dict())
        split_multiple_product(pathway_copy)
        model = mssilp.load(pathway_copy).bigm(bound)
    else:
        model = getattr(mssilp.load(pathway), formulation.value)(bound)
    model.solve()
    print(f"{formulation.value}: {model.num_constraints} constraints, "
          f"seeds {model.get_seeds()}")
    model.write(f"{formulation.value}.lp")
