import argparse
import logging
import pathlib
import sys
import mssilp
from mssilp.reduction import split_multiple_product, reduce_pathway


def print_count(pathway):
    print(f"Compound count: {pathway.num_compounds}, Reaction count: {pathway.num_reactions}")


def build_model(args):
    print(f"MSSILP v{mssilp.__version__}")
    pathway = mssilp.load_pathway(args.filename, input_type=args.input_type)
    print_count(pathway)
    if args.json_model is not None:
        pre = pathlib.Path(args.json_model).with_suffix(".pre.json")
        print(f"Writing pathway before the reductions to {pre}...")
        mssilp.export_pathway(pathway, pre)
    if args.split:
        count = split_multiple_product(pathway)
        print(f"Split {count} reactions")
        print_count(pathway)
    if args.preprocessing:
        totals = reduce_pathway(pathway, args.preprocessing)
        print(f"Reductions completed in {len(totals)} passes, "
              f"{sum(totals)} changes")
        print_count(pathway)
    if args.json_model is not None:
        post = pathlib.Path(args.json_model).with_suffix(".post.json")
        print(f"Writing pathway after the reductions to {post}...")
        mssilp.export_pathway(pathway, post)
    time = args.time
    if time == -1:
        time = max(1, min(pathway.num_reactions, pathway.num_compounds))
        print(f"Using max(1, min(#reactions, #compounds)) = {time} as time bound")
    model = mssilp.load(pathway, solver=args.solver)
    if args.mode == mssilp.Formulation.TIMESET:
        model.timeset(time + 2)
    elif args.mode == mssilp.Formulation.BIGM:
        model.bigm(time)
    else:
        model.pairwise(time)
    print(f"Exporting model to {args.model_name}...")
    model.write(args.model_name)
    print("Done.")


def check_solution(args):
    pathway = mssilp.load_pathway(args.model, input_type='json')
    print_count(pathway)
    values = mssilp.read_solution(args.solution)
    seeds = mssilp.seeds_from_values(values, threshold=args.threshold)
    print(f"Solution contains {len(seeds)} seeds")
    result = mssilp.check_seeds(pathway, seeds)
    if result.reachable:
        print(f"Completed {result.iterations} iterations, set is reachable.")
    else:
        print(f"Completed {result.iterations} iterations, set is unreachable.")
    return 0 if result.reachable else 1


def get_args(argv=None):
    parser = argparse.ArgumentParser(description="MSSILP: ILP models for the Minimal Seed Set problem")
    parser.add_argument(
        "--version",
        action="version",
        version=f"MSSILP v{mssilp.__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show log messages (-v for info, -vv for debug)"
    )
    subparsers = parser.add_subparsers(help="sub-command help")
    build = subparsers.add_parser("build", help="Build a Minimal Seed Set model from a pathway")
    build.add_argument(
        "mode",
        choices=[f.value for f in mssilp.Formulation],
        help="Formulation of the generated model"
    )
    build.add_argument("filename", help="Pathway file")
    build.add_argument("model_name", help="Output model file (.lp)")
    build.add_argument(
        "--input-type",
        choices=["readable", "pddl", "json"],
        default=None,
        help="Format of the pathway file (guessed from the extension by default)"
    )
    build.add_argument(
        "-t", "--time",
        type=int,
        default=10,
        help="M/T of the model, -1 to use min(#reactions, #compounds), at least 1"
    )
    build.add_argument(
        "-s", "--split",
        action="store_true",
        help="Split multiple product reactions"
    )
    build.add_argument(
        "-p", "--preprocessing",
        default="",
        help="Reductions applied until convergence: d (duplicates), "
             "P (p-dominated), S (s-dominated), m (merge)"
    )
    build.add_argument(
        "--json-model",
        default=None,
        help="Write the pathway before and after the reductions (.pre.json and .post.json)"
    )
    build.add_argument(
        "--solver",
        default=mssilp.Solvers.COIN_OR_CBC.value,
        help="Backend solver, determines the writer of the model"
    )
    build.set_defaults(func=build_model)
    check = subparsers.add_parser("check", help="Check the seeds of a solution")
    check.add_argument("model", help="Pathway in JSON format (see --json-model)")
    check.add_argument("solution", help="CPLEX XML solution file")
    check.add_argument(
        "--threshold",
        type=float,
        default=0.5,
        help="Min value of a selected seed indicator"
    )
    check.set_defaults(func=check_solution)
    return parser.parse_args(argv)


def main(argv=None):
    args = get_args(argv)
    if args.verbose > 0:
        logging.basicConfig(level=logging.DEBUG if args.verbose > 1 else logging.INFO,
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Check if 'func' is an attribute of args
    if hasattr(args, "func") and args.func:
        return args.func(args)
    return 0


if __name__ == '__main__':
    sys.exit(main())
