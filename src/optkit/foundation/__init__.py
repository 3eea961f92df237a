"""
Foundation layer: fitness values, domains, problems, exceptions, logging and
the observer protocol. Nothing in here depends on the engine.
"""
