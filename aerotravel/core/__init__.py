"""AeroTravel core: configuration-independent infrastructure (logging, monitoring, errors, database)."""
