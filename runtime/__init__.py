"""
Runtime layer: decision parsing, event logging and the turn-by-turn runner.

Import submodules directly (runtime.decision, runtime.events, runtime.runner).
"""
