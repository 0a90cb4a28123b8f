"""Ganttline - dependency-ordered project timelines for Gantt-style views."""
