from .errors import AntSystemError, InputError, DomainError
from .tsp import DistanceMatrix, TSPInstance
from .aco_base import ACOConfig, ACOResult
from .ant import Ant
from .ant_system import AntSystem
from .experiments import run_parameter_sweep, run_repeated_trials
