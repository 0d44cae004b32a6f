"""Legal Aid case management service.

This package contains the backend of a multi-office legal-aid platform that
takes a client from intake to a resolved case.

High-level architecture
-----------------------

- ``legal_aid.core``:

  - Logging and monitoring setup.
  - Password hashing and token helpers.
  - SQLModel entities and async repositories for every table.
  - Domain enums, status transition tables and API I/O schemas.

- ``legal_aid.server``:

  - The FastAPI application, its routers and middleware.
  - Service classes holding the business rules of each portal
    (client, coordinator, lawyer, kebele manager, admin).

Typical workflow
----------------

1. A client registers through the public intake form and a case is opened in
   the chosen office with status ``PENDING``.
2. The case is handed to the coordinator of that office with the fewest
   pending assignments.
3. The coordinator reviews documents, books appointments and assigns a lawyer.
4. The lawyer works the case, files appeals when needed and resolves it.
"""
