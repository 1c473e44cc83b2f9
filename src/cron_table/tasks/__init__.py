"""
Task subsystem.

Components:
- task_models.py: data structures (TaskEntry, CronTask)
- task_table.py: the thread-safe task table and its evaluate-and-dispatch scan
- task_executor.py: default executor (work channel + worker threads)
- task_api.py: small high-level helpers used by the rest of the package
"""
