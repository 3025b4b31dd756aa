"""RAM Points package.

Feature modules (members, events, attendance, imports, ...) follow the same
layering: frozen dataclass models, Protocol repositories with SQL
implementations, services holding the rules, and thin Flask controllers.
"""
