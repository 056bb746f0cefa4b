"""Components discovered by the module discovery tests.

``garage`` sorts before ``workshop``, so ``Car`` is registered before the
``Engine`` it depends on.
"""
