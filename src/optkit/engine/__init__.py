"""
Engine layer: sub-optimizers, cooperative coevolution and sequential niching.
"""
