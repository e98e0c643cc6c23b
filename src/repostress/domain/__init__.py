"""Domain layer — pure naming and layout rules, no I/O of its own."""
