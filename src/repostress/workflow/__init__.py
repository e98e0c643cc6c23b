"""Workflow layer — the only sanctioned way for actions to mutate the store."""
