"""Weekly study-session planner: session store, conflict checks and workload analytics."""

__version__ = "0.1.0"
