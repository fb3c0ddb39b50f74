"""
The CONTROLLER layer runs the per-tick pipeline:
Watcher -> (conditional) Grouper -> Cache reconciliation -> (on demand) Filter.
"""
