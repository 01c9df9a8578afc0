from functools import lru_cache
import logging

from supabase import Client

from tuturno.core.config import settings
from tuturno.application.ports.appointment_store import AppointmentStorePort
from tuturno.application.ports.employee_directory import EmployeeDirectoryPort
from tuturno.application.ports.notifications import NotificationPort
from tuturno.application.use_cases.request_reschedule import RequestRescheduleUseCase
from tuturno.application.use_cases.respond_to_appointment import RespondToAppointmentUseCase
from tuturno.application.use_cases.service_employee_selection import ServiceEmployeeSelection
from tuturno.infrastructure.memory.appointment_store import MemoryAppointmentStore
from tuturno.infrastructure.memory.employee_directory import MemoryEmployeeDirectory
from tuturno.infrastructure.memory.mock_notifier import MockNotifier
from tuturno.infrastructure.security.action_token import AppointmentTokenSigner
from tuturno.infrastructure.supabase.appointment_store import SupabaseAppointmentStore
from tuturno.infrastructure.supabase.client import close_supabase_client, create_supabase_client
from tuturno.infrastructure.supabase.employee_directory import SupabaseEmployeeDirectory
from tuturno.infrastructure.supabase.notifier import EdgeFunctionNotifier


logger = logging.getLogger(__name__)


def _use_memory_backend() -> bool:
    if settings.ENV.lower() in {"dev", "local"}:
        return True
    return not (settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY)


@lru_cache
def get_supabase_client() -> Client:
    return create_supabase_client(
        url=settings.SUPABASE_URL,
        service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache
def get_appointment_store() -> AppointmentStorePort:
    if _use_memory_backend():
        logger.info("Using MemoryAppointmentStore (ENV=%s)", settings.ENV)
        return MemoryAppointmentStore()
    return SupabaseAppointmentStore(get_supabase_client())


@lru_cache
def get_employee_directory() -> EmployeeDirectoryPort:
    if _use_memory_backend():
        logger.info("Using MemoryEmployeeDirectory (ENV=%s)", settings.ENV)
        return MemoryEmployeeDirectory()
    return SupabaseEmployeeDirectory(get_supabase_client())


@lru_cache
def get_notifier() -> NotificationPort:
    if _use_memory_backend():
        logger.info("Using MockNotifier (ENV=%s)", settings.ENV)
        return MockNotifier()
    return EdgeFunctionNotifier(get_supabase_client())


def get_token_signer() -> AppointmentTokenSigner:
    return AppointmentTokenSigner(settings.APPOINTMENT_TOKEN_SECRET)


def get_respond_use_case() -> RespondToAppointmentUseCase:
    return RespondToAppointmentUseCase(
        store=get_appointment_store(),
        notifier=get_notifier(),
        signer=get_token_signer(),
        client_appointments_path=settings.CLIENT_APPOINTMENTS_PATH,
    )


def get_request_reschedule_use_case() -> RequestRescheduleUseCase:
    return RequestRescheduleUseCase(
        store=get_appointment_store(),
        notifier=get_notifier(),
        signer=get_token_signer(),
    )


def get_service_employee_selection() -> ServiceEmployeeSelection:
    return ServiceEmployeeSelection(directory=get_employee_directory())


def shutdown_backend_clients() -> None:
    if get_supabase_client.cache_info().currsize:
        close_supabase_client(get_supabase_client())
    get_supabase_client.cache_clear()
    get_appointment_store.cache_clear()
    get_employee_directory.cache_clear()
    get_notifier.cache_clear()
