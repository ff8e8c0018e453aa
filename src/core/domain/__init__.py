"""Domain models and error taxonomy.

The domain knows nothing about HTTP libraries, the CLI or the terminal:
only requests, outcomes and the ways a run can fail.
"""
