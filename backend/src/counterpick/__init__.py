"""Counterpick: League of Legends draft assistant backend."""
