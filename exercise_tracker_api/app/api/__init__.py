"""
HTTP layer of the exercise tracker.

``router`` collects the endpoint modules under ``endpoints``; ``deps``
holds the FastAPI dependencies that hand services and parsed request
bodies to the route functions.
"""
