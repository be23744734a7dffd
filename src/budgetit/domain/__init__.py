"""Domain layer for budgetit application.

Services live in their own modules (``budgetit.domain.project`` and so on) and
are imported from there, so that the database layer can import
``budgetit.domain.entities`` without pulling every service in.
"""
