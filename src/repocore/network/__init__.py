"""Network boundary: transport error descriptions and their classification.

Converts transport-layer exceptions into domain failures so nothing above
this layer has to handle raw exceptions.
"""
