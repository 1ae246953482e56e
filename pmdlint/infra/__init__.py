"""Infrastructure adapters: the analysis engine, artifact resolvers and
file system helpers.
"""
