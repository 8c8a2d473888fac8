"""Veda: semantic search over the Rig Veda with adaptive result filtering."""
