# app/services/__init__.py
"""
Service layer root package.

Each service is built on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*), handed out by a RepositoryFactory
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base)

Typical pattern for a service:

    class SomeService(BaseService):
        def some_use_case(self, ...) -> ServiceResult[...]:
            try:
                ...
                return ServiceResult.success(data)
            except Exception as e:
                return self._handle_exception(e, "some use case")
"""
