# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base.*)

Services return ``ServiceResult`` values and own the transaction:

    service = ComplaintService(ComplaintRepository(db), db, notifier)
    result = service.get(complaint_id)
    if result:
        ...
"""
