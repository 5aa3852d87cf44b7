"""
The CONTROLLER layer turns model state into what the view draws.
It has no Qt dependency so it can be tested headless.
"""
