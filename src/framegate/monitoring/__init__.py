"""Widget status reporting and its sinks. See ``framegate.monitoring.status``."""
