"""Engine loop, scene base class and the seeded RNG."""
