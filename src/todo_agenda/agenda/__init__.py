"""Task agenda engine: registry, dependency graph, urgency and ranking.

Everything here operates on one in-memory snapshot built for a single run.
The topological sequence and urgency scores are only meaningful for the
complete graph, so any structural error aborts the whole run.
"""
