from .geometry import Point, Range, distance
from .parser import ObservationParseError, format_observations, parse_observations
from .samples import SAMPLE_NAMES, STATIONS, get_sample, make_observations
from .seeders import (
    BaseSeeder,
    CubeSeeder,
    SobolSeeder,
    SphereSeeder,
    make_seeder,
    random_point_in_cube,
    random_point_on_sphere,
)
from .solver import (
    DegenerateGeometryError,
    NonConvergenceError,
    SingularSystemError,
    Solution,
    SolveOptions,
    SolverConfig,
    TrilaterationError,
    get_solver_config,
    jacobian,
    residuals,
    set_solver_config,
    solve,
    solve_with_restarts,
    step,
    sum_of_squared_residuals,
    trilaterate,
)

__all__ = [
    'Point',
    'Range',
    'distance',
    'ObservationParseError',
    'parse_observations',
    'format_observations',
    'SAMPLE_NAMES',
    'STATIONS',
    'get_sample',
    'make_observations',
    'BaseSeeder',
    'CubeSeeder',
    'SphereSeeder',
    'SobolSeeder',
    'make_seeder',
    'random_point_in_cube',
    'random_point_on_sphere',
    'DegenerateGeometryError',
    'NonConvergenceError',
    'SingularSystemError',
    'TrilaterationError',
    'Solution',
    'SolveOptions',
    'SolverConfig',
    'get_solver_config',
    'set_solver_config',
    'residuals',
    'jacobian',
    'sum_of_squared_residuals',
    'step',
    'solve',
    'trilaterate',
    'solve_with_restarts',
]
