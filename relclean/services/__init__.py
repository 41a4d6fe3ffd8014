"""Application services.

Services hold the cleanup logic and coordinate the infrastructure layers
(git/, github/) on behalf of the CLI.
"""
