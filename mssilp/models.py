import numpy as np
import logging
import warnings
import picos as pc
import mip
from abc import ABC, abstractmethod
from functools import wraps
from numbers import Integral
from enum import Enum
from time import perf_counter
from mssilp.pathway import index_pathway
from mssilp.checker import seeds_from_values
from mssilp.errors import MalformedInputError, UnsupportedShapeError


logger = logging.getLogger(__name__)

_STATUS_MAPPING = {
    mip.OptimizationStatus.OPTIMAL: pc.modeling.solution.SS_OPTIMAL,
    mip.OptimizationStatus.FEASIBLE: pc.modeling.solution.SS_FEASIBLE,
    mip.OptimizationStatus.INFEASIBLE: pc.modeling.solution.SS_INFEASIBLE,
    mip.OptimizationStatus.UNBOUNDED: pc.modeling.solution.PS_UNBOUNDED,
    mip.OptimizationStatus.INT_INFEASIBLE: pc.modeling.solution.SS_INFEASIBLE,
    mip.OptimizationStatus.NO_SOLUTION_FOUND: pc.modeling.solution.PS_ILLPOSED,
    mip.OptimizationStatus.LOADED: pc.modeling.solution.VS_EMPTY,
    mip.OptimizationStatus.CUTOFF: pc.modeling.solution.SS_PREMATURE
}

_FEASIBLE = (pc.modeling.solution.SS_OPTIMAL, pc.modeling.solution.SS_FEASIBLE)


class Solvers(str, Enum):
    """Solvers supported by the mssilp module.

    Please refer to https://picos-api.gitlab.io/picos/introduction.html to see
    the list of supported solvers using the PICOS backend. The Python-MIP backend
    only supports the GUROBI and CBC solvers.

    Attributes:
        GUROBI_PYMIP (str): GUROBI through the Python-MIP backend. Commercial,
            free academic licenses are available at https://gurobi.com/free/.
        GUROBI (str): For using GUROBI with the PICOS backend instead of Python-MIP.
        COIN_OR_CBC (str): Free MIP solver provided with Python-MIP. Default solver.
        CPLEX (str): Commercial solver, supported by the PICOS backend.
        SCIP (str): Free academic solver, supported by the PICOS backend.
        GLPK (str): Open source solver, supported by the PICOS backend.
        MOSEK (str): Commercial solver, supported by the PICOS backend.
    """
    GUROBI_PYMIP = "gurobi_pymip",
    GUROBI = "gurobi",
    COIN_OR_CBC = "cbc",
    CPLEX = "cplex",
    GLPK = "glpk",
    SCIP = "scip",
    MOSEK = "mosek"


class Formulation(str, Enum):
    """ILP encodings of the Minimal Seed Set problem.

    Attributes:
        BIGM (str): Integer firing and production times per reaction and
            compound, activated with big-M terms. Requires single product
            reactions.
        TIMESET (str): Binary availability and firing indicators for each
            discrete time slot.
        PAIRWISE (str): Integer time per compound and one witness indicator
            per (compound, producing reaction) pair.
    """
    BIGM = "bigm",
    TIMESET = "timeset",
    PAIRWISE = "pairwise"


def load(pathway, solver=Solvers.COIN_OR_CBC):
    """
    Create an empty Minimal Seed Set model for a given solver.
    If the solver is Coin-OR CBC, an instance of PythonMipModel is used
    (which uses the Python-MIP lib as the backend). Otherwise, a PicosModel
    is created (which uses PICOS as the backend).

    Example:
        Find a minimal seed set using the pairwise formulation:

        ```python
        >>> import mssilp
        >>> pathway = mssilp.load_pathway("network.read")
        >>> seeds = (mssilp
                     .load(pathway)
                     .pairwise(20)
                     .solve(verbosity=1)
                     .get_seeds())
        ```

    Args:
        pathway (Pathway): The reaction network.
        solver (Solvers, optional): The solver to be used. Defaults to Solvers.COIN_OR_CBC.

    Returns:
        BaseModel: A BaseModel object, which can be PythonMipModel if CBC solver is
            used, or a PicosModel otherwise.
    """
    solver = str(solver.value) if isinstance(solver, Enum) else str(solver)
    if solver == 'cbc':
        return PythonMipModel(pathway=pathway, solver_name=solver)
    if solver == 'gurobi_pymip':
        return PythonMipModel(pathway=pathway, solver_name='gurobi')
    else:
        return PicosModel(pathway=pathway, solver_name=solver)


class _Variables(ABC):
    """Groups of variables of a model, by name prefix.

    Each group keeps the backend variables and the suffix of the name of
    each element, so that `values()` reports `x0`, `d3_1`, `u4_2`...
    regardless of the backend.
    """
    def __init__(self):
        self._groups = dict()

    def add(self, prefix, variables, labels):
        if variables is not None:
            self._groups[prefix] = (variables, list(labels))
        return variables

    def __getitem__(self, prefix):
        return self._groups[prefix][0]

    def __contains__(self, prefix):
        return prefix in self._groups

    @property
    def seeds(self):
        if "x" not in self:
            return None
        return self["x"]

    @abstractmethod
    def _group_values(self, variables):
        pass

    def values(self):
        result = dict()
        for prefix, (variables, labels) in self._groups.items():
            values = self._group_values(variables)
            if values is None:
                continue
            for label, value in zip(labels, values):
                result[f"{prefix}{label}"] = float(value)
        return result


class _PicosVariables(_Variables):
    def _group_values(self, variables):
        if variables.value is None:
            return None
        return np.array(variables.value, dtype=float).reshape(-1)


class _PythonMipVariables(_Variables):
    def _group_values(self, variables):
        values = [v.x for v in variables]
        if any(v is None for v in values):
            return None
        return np.array(values, dtype=float)


def _partial(fn):
    """Annotation for methods that return the instance itself to enable chaining.

    If a method `my_method` is annotated with @_partial, a method called `_my_method`
    is expected to be provided by a subclass. Parent method `my_method` is called first
    and the result is passed to the child method `_my_method`.

    """
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        # Invoke first the original method
        result = fn(self, *args, **kwargs)
        # If the result is a dict, update the kwargs
        if isinstance(result, dict):
            kwargs.update(result)
        else:
            kwargs['_parent_result'] = result
        if result is False:
            return self
        # Find subclass implementation
        fname = '_' + fn.__name__
        if not hasattr(self, fname):
            raise ValueError(f'Method "{fn.__name__}()" is marked as @_partial '
                             f'but the expected implementation "{fname}()" was not provided '
                             f'by {self.__class__.__name__}')
        func = getattr(self, fname)
        result = func(*args, **kwargs)
        if isinstance(result, BaseModel):
            return result
        return self

    return wrapper


def _check_bound(value, name):
    if not isinstance(value, Integral) or value < 1:
        raise ValueError(f"{name} has to be a positive integer, got {value}")
    return int(value)


class BaseModel(ABC):
    """Base class for building the ILP models of the Minimal Seed Set problem.

    It implements the chainable methods to set-up and solve one of the three
    formulations (see [Formulation][mssilp.models.Formulation]). Two
    implementations are available: PicosModel and PythonMipModel. The
    PicosModel uses the [PICOS library](https://picos-api.gitlab.io/picos/)
    as a backend to interact with different solvers. The PythonMipModel uses
    the [Python-MIP](https://www.python-mip.com/) library to solve the
    model using the CBC or GUROBI solvers.

    All the formulations share the seed indicators `x{i}` (one binary variable
    per compound) and minimize their sum. The time bound (M or T) has to be
    larger than the longest chain of reactions needed to produce a compound:
    with a smaller bound, seed sets that reach the whole pathway become
    infeasible. This is not detected.

    !!! note
        Do not try to instantiate this class directly. Use the [load()][mssilp.models.load]
        function instead. The method automatically selects the right implementation
        depending on the solver.

    """
    def __init__(self, pathway=None, solver_name=None):
        self.pathway = pathway
        self.variables = None
        self.formulation = None
        self._last_start_time = None
        self.last_solver_time = None
        # Default recommended options
        self._options = {
            'int_tol': 1e-8,
            'feas_tol': 1e-8,
            'opt_tol': 1e-5,
            'verbosity': 0,
            'solver': solver_name
        }
        self.problem = self.initialize_problem()
        self.setup(**self._options)

    @abstractmethod
    def initialize_problem(self):
        pass

    @abstractmethod
    def get_solver_status(self):
        pass

    @property
    @abstractmethod
    def num_constraints(self):
        pass

    @_partial
    def setup(self, **kwargs):
        """Provide the options for the solver.

        Attributes:
            int_tol (float): Integrality tolerance for integer variables.
                Defaults to 1e-8.
            feas_tol (float): Feasibility tolerance. Defaults to 1e-8.
            opt_tol (float): Relative MIP gap tolerance for MIP problems.
                Defaults to 1e-5.
            verbosity (int): Values above 0 force the backends to be verbose.
                Use a value of 1 to show useful information about the search.
                Defaults to 0.

        Returns:
            BaseModel: the configured instance of the BaseModel
        """
        if self.problem is None:
            warnings.warn("Problem cannot be configured since it was not initialized")
            return False
        options = {k: v for k, v in kwargs.items()
                   if k in ("int_tol", "feas_tol", "opt_tol", "verbosity", "solver") and v is not None}
        self._options.update(options)
        return self._options

    def _prepare(self, formulation):
        if self.formulation is not None:
            warnings.warn(f"The model already contains the {self.formulation.value} "
                          f"formulation, {formulation.value} is ignored")
            return None
        logger.info("Building %s model: %d compounds, %d reactions", formulation.value,
                    self.pathway.num_compounds, self.pathway.num_reactions)
        self.formulation = formulation
        return index_pathway(self.pathway)

    @_partial
    def bigm(self, m):
        """Build the big-M formulation with integer times in [0, M].

        Variables: seed indicator `x{i}` and production time `tm{i}` for
        each compound, activity indicator `u{j}` and firing time `tr{j}` for
        each reaction. Constraints:

        - every compound is a seed or is produced by an active reaction:
          $x_i + \\sum_{j \\in P(i)} u_j \\geq 1$
        - an active reaction fires after its non-seed substrates are produced:
          $tm_i + 1 \\leq tr_j + M (1 - u_j) + M x_i$
        - the product of an active reaction is available when it fires:
          $tr_j \\leq tm_i + M (1 - u_j)$

        Args:
            m (int): Big-M constant, also the upper bound of the times.

        Raises:
            UnsupportedShapeError: if a reaction has more than one product
                (use [split_multiple_product][mssilp.reduction.split_multiple_product] first).

        Returns:
            BaseModel: instance of BaseModel with the modifications applied.
        """
        m = _check_bound(m, "M")
        for rxn in self.pathway.reactions:
            products = set(rxn.product)
            if len(products) > 1:
                raise UnsupportedShapeError(
                    f"Reaction {rxn.id} ({rxn.name}) has {len(products)} products, "
                    f"the Big-M model requires single product reactions",
                    reaction_id=rxn.id)
        index = self._prepare(Formulation.BIGM)
        if index is None:
            return False
        return dict(bound=m, index=index)

    @_partial
    def timeset(self, t):
        """Build the time-slot formulation with slots 0..T-1.

        Variables: seed indicator `x{i}`, availability `d{i}_{t}` of each
        compound at each slot and firing indicator `s{j}_{t}` of each reaction
        at each slot. Constraints: seeds are the compounds available at slot
        0, every compound is available at slot T-1, a reaction fires only if
        its substrates are available and a compound becomes available only if
        it was already available or a producer fired in the previous slot.

        Args:
            t (int): Number of time slots.

        Returns:
            BaseModel: instance of BaseModel with the modifications applied.
        """
        t = _check_bound(t, "T")
        index = self._prepare(Formulation.TIMESET)
        if index is None:
            return False
        return dict(slots=t, index=index)

    @_partial
    def pairwise(self, m):
        """Build the pairwise precedence formulation with times in [0, M].

        Variables: seed indicator `x{i}` and time `t{i}` for each compound, and
        a witness indicator `u{i}_{j}` for each reaction j producing compound
        i. Constraints:

        - every compound is a seed or has a witness reaction:
          $x_i + \\sum_{j \\in P(i)} u_{i,j} \\geq 1$
        - the non-seed substrates of a witness come before the compound:
          $t_a + 1 \\leq t_b + M x_a + M (1 - u_{b,j})$

        Multiple product reactions are allowed.

        Args:
            m (int): Big-M constant, also the upper bound of the times.

        Returns:
            BaseModel: instance of BaseModel with the modifications applied.
        """
        m = _check_bound(m, "M")
        index = self._prepare(Formulation.PAIRWISE)
        if index is None:
            return False
        return dict(bound=m, index=index)

    @_partial
    def fix_seeds(self, seeds):
        """Force the seed set of the solution.

        The seed indicators of the given compounds are fixed to 1 and the
        remaining ones to 0, so the model is feasible only if the time bound
        allows the given seeds to produce every compound.

        Args:
            seeds (list): ids of the seed compounds.

        Returns:
            BaseModel: instance of BaseModel with the modifications applied.
        """
        if self.variables is None or self.variables.seeds is None:
            raise ValueError("The model has no seed variables, build a formulation "
                             "calling bigm(), timeset() or pairwise() first.")
        seeds = set(int(s) for s in seeds)
        invalid = [s for s in seeds if s < 0 or s >= self.pathway.num_compounds]
        if len(invalid) > 0:
            raise MalformedInputError(f"Invalid compound ids: {sorted(invalid)}")
        return dict(seeds=seeds)

    @_partial
    def solve(self, verbosity=None, max_seconds=None):
        """Solve the current model and assign the values to the variables of the model.

        Args:
            verbosity (int, optional): Level of verbosity for the solver.
                Values above 0 will force the backend to show output information of the search. Defaults to None.
            max_seconds (int, optional): Max time in seconds for the search. Defaults to None.
        """
        if self.formulation is None:
            warnings.warn("Nothing to solve, build a formulation first")
            return False
        self._last_start_time = perf_counter()

    @_partial
    def write(self, path):
        """Export the model to a file.

        The format is selected by the backend from the extension of the file
        (use `.lp` for the LP text format).

        Args:
            path (str): Path of the exported file.
        """
        if self.formulation is None:
            warnings.warn("The model is empty, build a formulation first")
        logger.info("Writing model to %s", path)

    def is_feasible(self):
        """Whether the last call to solve() found a solution."""
        return self.get_solver_status()["status"] in _FEASIBLE

    def get_values(self):
        """Get the values of all the variables after solving.

        Returns:
            dict: variable names (`x0`, `tm3`, `d1_4`, ...) mapped to their
                values. Empty if no solution is available.
        """
        if self.variables is None or not self.is_feasible():
            return dict()
        return self.variables.values()

    def get_seeds(self, threshold=0.5):
        """Ids of the compounds selected as seeds by the solver.

        Args:
            threshold (float, optional): Min value of the seed indicator of a
                selected compound. Defaults to 0.5.

        Returns:
            list: Sorted list of compound ids.
        """
        return seeds_from_values(self.get_values(), threshold=threshold)


class PicosModel(BaseModel):
    def __init__(self, pathway=None, solver_name=None):
        super().__init__(pathway=pathway, solver_name=solver_name)
        self.variables = _PicosVariables()
        self.solutions = None

    def initialize_problem(self):
        return pc.Problem()

    @property
    def num_constraints(self):
        return len(self.problem.constraints)

    def _setup(self, *args, **kwargs):
        self.problem.options["verbosity"] = kwargs["verbosity"] if "verbosity" in kwargs else self._options["verbosity"]
        self.problem.options["rel_bnb_opt_tol"] = kwargs["opt_tol"] if "opt_tol" in kwargs else self._options["opt_tol"]
        self.problem.options["integrality_tol"] = kwargs["int_tol"] if "int_tol" in kwargs else self._options["int_tol"]
        self.problem.options["abs_prim_fsb_tol"] = kwargs["feas_tol"] if "feas_tol" in kwargs else self._options["feas_tol"]
        self.problem.options["abs_dual_fsb_tol"] = self.problem.options["abs_prim_fsb_tol"]
        self.problem.options["solver"] = kwargs["solver"] if "solver" in kwargs else self._options["solver"]
        # Infeasible models are reported through the solver status
        self.problem.options["primals"] = None
        return True

    @staticmethod
    def _binary(name, n):
        return pc.BinaryVariable(name, n) if n > 0 else None

    @staticmethod
    def _integer(name, n, m):
        return pc.IntegerVariable(name, n, lower=0, upper=m) if n > 0 else None

    def _seed_variables(self):
        cs = self.pathway.num_compounds
        X = self.variables.add("x", self._binary("x", cs), range(cs))
        if X is not None:
            C = pc.Constant("C", value=[1] * cs)
            self.problem.set_objective("min", C.T * X)
        return X

    def _bigm(self, *args, **kwargs):
        m, index = kwargs["bound"], kwargs["index"]
        cs, rs = self.pathway.num_compounds, self.pathway.num_reactions
        P = self.problem
        X = self._seed_variables()
        TM = self.variables.add("tm", self._integer("tm", cs, m), range(cs))
        U = self.variables.add("u", self._binary("u", rs), range(rs))
        TR = self.variables.add("tr", self._integer("tr", rs, m), range(rs))
        for i in range(cs):
            expr = X[i]
            for j in index.producers[i]:
                expr = expr + U[j]
            P.add_constraint(expr >= 1)
        for j, substrate in enumerate(index.requires):
            for i in substrate:
                P.add_constraint(TM[i] + 1 <= TR[j] + m * (1 - U[j]) + m * X[i])
        for j, products in enumerate(index.produces):
            for i in products:
                P.add_constraint(TR[j] <= TM[i] + m * (1 - U[j]))
        return True

    def _timeset(self, *args, **kwargs):
        T, index = kwargs["slots"], kwargs["index"]
        cs, rs = self.pathway.num_compounds, self.pathway.num_reactions
        P = self.problem
        X = self._seed_variables()
        # Vectors in row-major order, d{i}_{t} is D[i * T + t]
        D = self.variables.add("d", self._binary("d", cs * T),
                               (f"{i}_{t}" for i in range(cs) for t in range(T)))
        S = self.variables.add("s", self._binary("s", rs * T),
                               (f"{j}_{t}" for j in range(rs) for t in range(T)))
        for i in range(cs):
            P.add_constraint(D[i * T] == X[i])
            P.add_constraint(D[i * T + T - 1] == 1)
        for j, substrate in enumerate(index.requires):
            for i in substrate:
                for t in range(T):
                    P.add_constraint(D[i * T + t] >= S[j * T + t])
        for i in range(cs):
            for t in range(1, T):
                expr = D[i * T + t - 1]
                for j in index.producers[i]:
                    expr = expr + S[j * T + t - 1]
                P.add_constraint(D[i * T + t] <= expr)
        return True

    def _pairwise(self, *args, **kwargs):
        m, index = kwargs["bound"], kwargs["index"]
        cs = self.pathway.num_compounds
        P = self.problem
        X = self._seed_variables()
        TI = self.variables.add("t", self._integer("t", cs, m), range(cs))
        pairs = [(b, j) for b in range(cs) for j in index.producers[b]]
        U = self.variables.add("u", self._binary("u", len(pairs)),
                               (f"{b}_{j}" for b, j in pairs))
        witnesses = [[] for _ in range(cs)]
        for k, (b, j) in enumerate(pairs):
            witnesses[b].append(k)
            for a in index.requires[j]:
                P.add_constraint(TI[a] + 1 <= TI[b] + m * X[a] + m * (1 - U[k]))
        for i in range(cs):
            expr = X[i]
            for k in witnesses[i]:
                expr = expr + U[k]
            P.add_constraint(expr >= 1)
        return True

    def _fix_seeds(self, *args, **kwargs):
        seeds = kwargs["seeds"]
        X = self.variables.seeds
        for i in range(self.pathway.num_compounds):
            self.problem.add_constraint(X[i] == (1 if i in seeds else 0))
        return True

    def _solve(self, **kwargs):
        max_seconds = kwargs["max_seconds"] if "max_seconds" in kwargs else None
        verbosity = kwargs["verbosity"] if "verbosity" in kwargs else None
        init_max_seconds = self.problem.options["timelimit"]
        init_verbosity = self.problem.options["verbosity"]
        if max_seconds is not None:
            self.problem.options["timelimit"] = max_seconds
        if verbosity is not None:
            self.problem.options["verbosity"] = verbosity
        self.solutions = self.problem.solve()
        self.problem.options["timelimit"] = init_max_seconds
        self.problem.options["verbosity"] = init_verbosity
        self.last_solver_time = perf_counter() - self._last_start_time
        return True

    def _write(self, path, **kwargs):
        self.problem.write_to_file(path)

    def get_solver_status(self):
        if self.solutions is None:
            status = pc.modeling.solution.VS_EMPTY
        else:
            status = self.solutions.claimedStatus
        return {
            "status": status,
            "objective_value": self.problem.value if status in _FEASIBLE else None,
            "elapsed_seconds": self.last_solver_time
        }


class PythonMipModel(BaseModel):
    def __init__(self, pathway=None, solver_name=None):
        super().__init__(pathway=pathway, solver_name=solver_name)
        self.variables = _PythonMipVariables()

    def initialize_problem(self):
        solver = self._options["solver"]
        if solver is None:
            solver = 'cbc'
        else:
            solver = solver.lower()
        if solver == 'gurobi':
            mip_solver = mip.GRB
        elif solver == 'cbc':
            mip_solver = mip.CBC
        else:
            raise ValueError("Only gurobi and cbc are supported with Python-MIP")
        return mip.Model("MSS", sense=mip.MINIMIZE, solver_name=mip_solver)

    @property
    def num_constraints(self):
        return self.problem.num_rows

    def _setup(self, *args, **kwargs):
        self.problem.max_mip_gap = kwargs["opt_tol"] if "opt_tol" in kwargs else self._options["opt_tol"]
        self.problem.max_gap = self.problem.max_mip_gap
        self.problem.infeas_tol = kwargs["feas_tol"] if "feas_tol" in kwargs else self._options["feas_tol"]
        self.problem.opt_tol = self.problem.infeas_tol
        self.problem.integer_tol = kwargs["int_tol"] if "int_tol" in kwargs else self._options["int_tol"]
        self.problem.verbose = kwargs["verbosity"] if "verbosity" in kwargs else self._options["verbosity"]
        self.problem.threads = -1
        return True

    def _binary(self, name, labels):
        return [self.problem.add_var(name=f"{name}{label}", var_type=mip.BINARY)
                for label in labels]

    def _integer(self, name, labels, m):
        return [self.problem.add_var(name=f"{name}{label}", var_type=mip.INTEGER, lb=0, ub=m)
                for label in labels]

    def _seed_variables(self):
        cs = range(self.pathway.num_compounds)
        X = self.variables.add("x", self._binary("x", cs), cs)
        self.problem.objective = mip.xsum(X)
        self.problem.sense = mip.MINIMIZE
        return X

    def _bigm(self, *args, **kwargs):
        m, index = kwargs["bound"], kwargs["index"]
        cs, rs = range(self.pathway.num_compounds), range(self.pathway.num_reactions)
        X = self._seed_variables()
        TM = self.variables.add("tm", self._integer("tm", cs, m), cs)
        U = self.variables.add("u", self._binary("u", rs), rs)
        TR = self.variables.add("tr", self._integer("tr", rs, m), rs)
        for i in cs:
            self.problem += X[i] + mip.xsum(U[j] for j in index.producers[i]) >= 1
        for j, substrate in enumerate(index.requires):
            for i in substrate:
                self.problem += TM[i] + 1 <= TR[j] + m * (1 - U[j]) + m * X[i]
        for j, products in enumerate(index.produces):
            for i in products:
                self.problem += TR[j] <= TM[i] + m * (1 - U[j])
        return True

    def _timeset(self, *args, **kwargs):
        T, index = kwargs["slots"], kwargs["index"]
        cs, rs = range(self.pathway.num_compounds), range(self.pathway.num_reactions)
        X = self._seed_variables()
        D = [self._binary(f"d{i}_", range(T)) for i in cs]
        S = [self._binary(f"s{j}_", range(T)) for j in rs]
        self.variables.add("d", [v for row in D for v in row],
                           (f"{i}_{t}" for i in cs for t in range(T)))
        self.variables.add("s", [v for row in S for v in row],
                           (f"{j}_{t}" for j in rs for t in range(T)))
        for i in cs:
            self.problem += D[i][0] == X[i]
            self.problem += D[i][T - 1] == 1
        for j, substrate in enumerate(index.requires):
            for i in substrate:
                for t in range(T):
                    self.problem += D[i][t] >= S[j][t]
        for i in cs:
            for t in range(1, T):
                self.problem += D[i][t] <= D[i][t - 1] + mip.xsum(S[j][t - 1] for j in index.producers[i])
        return True

    def _pairwise(self, *args, **kwargs):
        m, index = kwargs["bound"], kwargs["index"]
        cs = range(self.pathway.num_compounds)
        X = self._seed_variables()
        TI = self.variables.add("t", self._integer("t", cs, m), cs)
        witnesses = [dict() for _ in cs]
        for b in cs:
            for j in index.producers[b]:
                u_bj = self.problem.add_var(name=f"u{b}_{j}", var_type=mip.BINARY)
                witnesses[b][j] = u_bj
                for a in index.requires[j]:
                    self.problem += TI[a] + 1 <= TI[b] + m * X[a] + m * (1 - u_bj)
        self.variables.add("u", [u for w in witnesses for u in w.values()],
                           (f"{b}_{j}" for b in cs for j in witnesses[b]))
        for i in cs:
            self.problem += X[i] + mip.xsum(witnesses[i].values()) >= 1
        return True

    def _fix_seeds(self, *args, **kwargs):
        seeds = kwargs["seeds"]
        for i, x in enumerate(self.variables.seeds):
            self.problem += x == (1 if i in seeds else 0)
        return True

    def _solve(self, **kwargs):
        max_seconds = kwargs["max_seconds"] if "max_seconds" in kwargs else None
        max_seconds = 10 * 60 if max_seconds is None else max_seconds
        verbosity = kwargs["verbosity"] if "verbosity" in kwargs else None
        init_verbosity = self.problem.verbose
        if verbosity is not None:
            self.setup(verbosity=verbosity)
        self.problem.optimize(max_seconds=max_seconds)
        self.setup(verbosity=init_verbosity)
        self.last_solver_time = perf_counter() - self._last_start_time
        return True

    def _write(self, path, **kwargs):
        self.problem.write(path)

    def get_solver_status(self):
        return {
            "status": _STATUS_MAPPING[self.problem.status] \
                if self.problem.status in _STATUS_MAPPING \
                     else pc.modeling.solution.PS_UNKNOWN,
            "objective_value": self.problem.objective_value,
            "elapsed_seconds": self.last_solver_time
        }


def build_bigm_model(pathway, m, solver=Solvers.COIN_OR_CBC):
    """Compile the pathway into the big-M formulation. See [BaseModel.bigm][mssilp.models.BaseModel]."""
    return load(pathway, solver=solver).bigm(m)


def build_timeset_model(pathway, t, solver=Solvers.COIN_OR_CBC):
    """Compile the pathway into the time-slot formulation. See [BaseModel.timeset][mssilp.models.BaseModel]."""
    return load(pathway, solver=solver).timeset(t)


def build_pairwise_model(pathway, m, solver=Solvers.COIN_OR_CBC):
    """Compile the pathway into the pairwise precedence formulation. See [BaseModel.pairwise][mssilp.models.BaseModel]."""
    return load(pathway, solver=solver).pairwise(m)
