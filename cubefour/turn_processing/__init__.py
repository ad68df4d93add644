"""Move validation helpers.

Every move, whatever collaborator submits it, flows through the same pipeline
so rejections carry a consistent reason and show up the same way in logs.
"""
