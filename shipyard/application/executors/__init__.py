"""
Application Executors Package

Architectural Intent:
- Local and remote implementations of the container lifecycle
- ExecutorSelector picks one per operation from the target address
"""

from shipyard.application.executors.local_executor import LocalExecutor
from shipyard.application.executors.remote_executor import RemoteExecutor
from shipyard.application.executors.executor_selector import ExecutorSelector

__all__ = ["LocalExecutor", "RemoteExecutor", "ExecutorSelector"]
