"""
Gradebook: students, assignments and grades with validation and
file-backed repositories.

The public entry point is :class:`gradebook.services.GradebookService`,
usually obtained from :func:`gradebook.main.build_service`.
"""

__version__ = "1.0.0"
__author__ = "Gradebook Development Team"
__description__ = "Validated student, assignment and grade bookkeeping"
