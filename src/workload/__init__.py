"""Academic workload computation, validation and distribution engine."""
