"""Reference-quality Meeus algorithms: time scales, Sun and Moon positions, events."""
