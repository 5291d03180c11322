"""Markdown-backed kanban boards and task lists."""
