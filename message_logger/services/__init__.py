"""Service layer: severity table, sinks, host hook, router and persistence."""
