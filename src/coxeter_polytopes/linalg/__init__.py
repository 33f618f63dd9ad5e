"""
Linear algebra kernels for hyperbolic hyperplane arrangements.

Implements:
- Euclidean and Lorentzian inner products
- Dihedral angle to inner product conversion
- Nullspace and LQ factorisation of a hyperbolic basis
- Underdetermined solves with a one-dimensional kernel

Main entry points:
- `mink_inner_prod(a, b)`: Lorentzian form with time coordinate last
- `min_cos_angle(m)`: -cos(π/m)
- `UDSolver(A).solve(b)`: particular solution plus kernel direction
"""

from .calc import (
    eucl_inner_prod,
    eucl_sq_norm,
    mink_inner_prod,
    mink_sq_norm,
    mink_products,
    min_cos_angle,
)

from .nullspace import (
    Nullspace,
    compute_nullspace,
    qr_rank,
)

from .lq_info import LQInfo

from .underdetermined_solver import (
    UDSolution,
    UDSolver,
    solve_underdetermined,
)

__all__ = [
    # Inner products
    "eucl_inner_prod",
    "eucl_sq_norm",
    "mink_inner_prod",
    "mink_sq_norm",
    "mink_products",
    "min_cos_angle",
    # Nullspace
    "Nullspace",
    "compute_nullspace",
    "qr_rank",
    # LQ
    "LQInfo",
    # Solver
    "UDSolution",
    "UDSolver",
    "solve_underdetermined",
]
