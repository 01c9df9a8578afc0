from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from tuturno.api.schemas import (
    RescheduleRequestSchema,
    RescheduleResponseSchema,
    RespondRequestSchema,
    RespondResponseSchema,
)
from tuturno.application.exceptions import (
    AppointmentNotFoundError,
    AppointmentNotPendingError,
    BackendUnavailableError,
    ConfigurationError,
    InvalidActionError,
    InvalidTokenError,
    MissingParametersError,
)
from tuturno.application.use_cases.request_reschedule import RequestRescheduleUseCase
from tuturno.application.use_cases.respond_to_appointment import RespondToAppointmentUseCase
from tuturno.wiring.dependencies import get_request_reschedule_use_case, get_respond_use_case


router = APIRouter()
logger = logging.getLogger(__name__)

INVALID_LINK = "Invalid or expired link"


@router.post("/appointments/{appointment_id}/respond", response_model=RespondResponseSchema)
def respond(
    appointment_id: str,
    req: RespondRequestSchema,
    uc: RespondToAppointmentUseCase = Depends(get_respond_use_case),
):
    try:
        result = uc.execute(appointment_id=appointment_id, action=req.action, token=req.token)
    except InvalidActionError:
        raise HTTPException(status_code=400, detail="Invalid action")
    except MissingParametersError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidTokenError:
        raise HTTPException(status_code=403, detail=INVALID_LINK)
    except AppointmentNotFoundError:
        raise HTTPException(status_code=404, detail="Appointment not found")
    except AppointmentNotPendingError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": "Appointment is no longer pending confirmation", "current_status": e.current_status},
        )
    except BackendUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.exception("Error in appointment respond", extra={"appointment_id": appointment_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Error processing the response")

    return RespondResponseSchema(message=result.message, redirect_url=result.redirect_url)


@router.post("/send-reschedule-request", response_model=RescheduleResponseSchema)
def send_reschedule_request(
    req: RescheduleRequestSchema,
    uc: RequestRescheduleUseCase = Depends(get_request_reschedule_use_case),
):
    try:
        uc.execute(appointment_id=req.appointment_id, closed_date=req.closed_date)
    except AppointmentNotFoundError:
        raise HTTPException(status_code=404, detail="Appointment not found")
    except ConfigurationError as e:
        logger.error("Server misconfiguration", extra={"appointment_id": req.appointment_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Internal server error")
    except BackendUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return RescheduleResponseSchema(message="Reschedule request email sent successfully")
