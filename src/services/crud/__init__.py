"""Generic table CRUD: schema introspection, form fields, statements, persistence."""
