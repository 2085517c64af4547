"""Antsiege - turn-based ants-versus-bees tunnel defense engine."""
