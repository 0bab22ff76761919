from .elevate import (ElevatedExecutor, NullExecutor, OsaScriptExecutor, PkexecExecutor,
                      SudoExecutor, executor_for)
from .terminate import TerminationController
