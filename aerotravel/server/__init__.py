"""FastAPI server for the AeroTravel operations backend."""
