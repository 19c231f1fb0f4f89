"""
The line protocol spoken by the television and the dispatcher that correlates each command with its response.
"""
