"""
Core building blocks.

- ports.py: Protocols for the pattern matcher, task body and executor
- errors.py: exception types
- rwlock.py: reader/writer lock guarding the task table
- state.py: AppState container
"""
