from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from coaching.core.config import settings
from coaching.core.logging import configure_logging
from coaching.endpoints import academics, auth, content, directory, exam, finance, notice, parent, student
from coaching.middleware.exceptions import global_exception_handler, validation_exception_handler
from coaching.middleware.logging import RequestLoggingMiddleware
from coaching.services.push import push_service
from coaching.utils.events import event_bus, NOTICE_CREATED

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, global_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(exam.router, prefix="/exams", tags=["Exams"])
app.include_router(finance.router, prefix="/finance", tags=["Finance"])
app.include_router(directory.router, prefix="/erp", tags=["ERP Directory"])
app.include_router(academics.router, prefix="/erp", tags=["ERP Academics"])
app.include_router(content.router, prefix="/erp", tags=["ERP Content"])
app.include_router(student.router, prefix="/student", tags=["Student"])
app.include_router(notice.router, prefix="/notices", tags=["Notices"])
app.include_router(parent.router, prefix="/parent", tags=["Parent"])

event_bus.subscribe(NOTICE_CREATED, push_service.handle_notice_created)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
