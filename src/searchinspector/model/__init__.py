"""
The MODEL layer contains pure data structures and the inspector algorithms.
It has NO knowledge of the GUI (Qt). It deals with grouping, view state and
property-tree filtering over a host object graph.
"""
