from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator

import asyncpg  # type: ignore[import-untyped]
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.asyncpg import AsyncPGInstrumentor
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_fastapi_instrumentator import Instrumentator
import strawberry
from strawberry.fastapi import GraphQLRouter

from dashboard.auth.application.use_cases.authenticate import AuthenticateUseCase
from dashboard.auth.infrastructure.credentials.credentials_provider import CredentialsProvider
from dashboard.auth.infrastructure.persistence.postgres.user_repository_asyncpg import (
    UserRepositoryAsyncpg,
)
from dashboard.core.config import settings
from dashboard.invoicing.application.use_cases.create_invoice import CreateInvoiceUseCase
from dashboard.invoicing.application.use_cases.delete_invoice import DeleteInvoiceUseCase
from dashboard.invoicing.application.use_cases.update_invoice import UpdateInvoiceUseCase
from dashboard.invoicing.domain.entities.invoice import Invoice
from dashboard.invoicing.domain.errors import InvoicePersistenceError
from dashboard.invoicing.infrastructure.persistence.postgres.invoice_repository_asyncpg import (
    InvoiceRepositoryAsyncpg,
)
from dashboard.shared.infrastructure.cache.route_cache import RouteCache
from dashboard.shared.infrastructure.logging.structured_logger import configure_json_logging
from dashboard.web.routes import router


@strawberry.type
class InvoiceType:
    id: str
    customer_id: str
    amount: int
    status: str
    date: date


@strawberry.type
class Query:
    @strawberry.field
    async def invoices(
        self,
        info: strawberry.Info,
        customer_id: str | None = None,
    ) -> list[InvoiceType]:
        request = info.context["request"]
        provider = request.app.state.credentials_provider
        token = request.cookies.get(provider.cookie_name)
        if not token or provider.verify_session(token) is None:
            raise PermissionError("Not authenticated")

        repository = request.app.state.invoice_repository
        invoices = await repository.fetch_invoices(customer_id=customer_id)
        return [_invoice_to_type(invoice) for invoice in invoices]


def _invoice_to_type(invoice: Invoice) -> InvoiceType:
    return InvoiceType(
        id=invoice.id,
        customer_id=invoice.customer_id,
        amount=invoice.amount,
        status=invoice.status.value,
        date=invoice.date,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_json_logging()
    missing_auth_settings = [
        name for name, value in (("AUTH_SECRET", settings.auth_secret),) if not value
    ]
    if missing_auth_settings:
        raise RuntimeError(
            "Missing required auth environment variables: "
            + ", ".join(missing_auth_settings)
        )
    tracer_provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: settings.otel_service_name})
    )
    tracer_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=settings.otel_exporter_endpoint,
                insecure=True,
            )
        )
    )
    trace.set_tracer_provider(tracer_provider)
    asyncpg_instrumentor = AsyncPGInstrumentor()
    asyncpg_instrumentor.instrument()
    app.state.db_pool = await asyncpg.create_pool(
        settings.database_url, ssl=settings.database_ssl
    )
    invoice_repository = InvoiceRepositoryAsyncpg(db_pool=app.state.db_pool)
    route_cache = RouteCache()
    credentials_provider = CredentialsProvider(
        user_repository=UserRepositoryAsyncpg(db_pool=app.state.db_pool),
        secret=settings.auth_secret,
        cookie_name=settings.session_cookie_name,
        session_ttl_minutes=settings.session_ttl_minutes,
        secure_cookie=settings.session_cookie_secure,
    )
    app.state.invoice_repository = invoice_repository
    app.state.route_cache = route_cache
    app.state.credentials_provider = credentials_provider
    app.state.authenticate = AuthenticateUseCase(sign_in=credentials_provider)
    app.state.create_invoice = CreateInvoiceUseCase(
        invoice_repository=invoice_repository, path_revalidator=route_cache
    )
    app.state.update_invoice = UpdateInvoiceUseCase(
        invoice_repository=invoice_repository, path_revalidator=route_cache
    )
    app.state.delete_invoice = DeleteInvoiceUseCase(
        invoice_repository=invoice_repository, path_revalidator=route_cache
    )

    try:
        yield
    finally:
        await app.state.db_pool.close()
        asyncpg_instrumentor.uninstrument()
        tracer_provider.shutdown()


app = FastAPI(title="Invoice Dashboard", lifespan=lifespan)
FastAPIInstrumentor.instrument_app(app)
Instrumentator().instrument(app).expose(app)
schema = strawberry.Schema(query=Query)
app.include_router(GraphQLRouter(schema), prefix="/graphql")
app.include_router(router)


@app.exception_handler(InvoicePersistenceError)
async def invoice_persistence_error_handler(
    request: Request, exc: InvoicePersistenceError
) -> JSONResponse:
    return JSONResponse(
        {"message": str(exc)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
