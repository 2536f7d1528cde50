"""
Task subsystem.

Components:
- dates.py: input and canonical date grammars (When)
- task_models.py: the Task variant (ToDo / Deadline / Event)
- task_list.py: ordered in-memory list with 1-based indexing
- codec.py: Task <-> storage record line
- task_store.py: whole-file load/save
- task_scheduler.py: polling reminder scheduler
"""
