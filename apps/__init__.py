"""Domain apps of the StudentNest platform."""
