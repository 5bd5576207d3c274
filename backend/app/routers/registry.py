"""
Application and MTP server registries
"""
from typing import List

from fastapi import APIRouter, Depends

from app.dependencies.store import get_store
from app.repositories import CredentialStore
from app.schemas import ApplicationCreate, ApplicationOut, MtpServerCreate, MtpServerOut, SuccessResponse
from app.services.registry_service import RegistryService
from app.utils.time import to_iso_z

router = APIRouter(prefix="/api", tags=["registry"])


@router.get("/apps", response_model=List[ApplicationOut])
def list_apps(store: CredentialStore = Depends(get_store)):
    return [
        ApplicationOut(
            id=a.id,
            name=a.name,
            description=a.description,
            created_at=to_iso_z(a.created_at),
        )
        for a in RegistryService.list_applications(store)
    ]


@router.post("/apps", response_model=SuccessResponse)
def create_app(payload: ApplicationCreate, store: CredentialStore = Depends(get_store)):
    RegistryService.create_application(store, payload.name, payload.description)
    return SuccessResponse(success=True)


@router.get("/mtp-servers", response_model=List[MtpServerOut])
def list_mtp_servers(store: CredentialStore = Depends(get_store)):
    return [
        MtpServerOut(id=s.id, name=s.name, url=s.url, created_at=to_iso_z(s.created_at))
        for s in RegistryService.list_mtp_servers(store)
    ]


@router.post("/mtp-servers", response_model=SuccessResponse)
def create_mtp_server(payload: MtpServerCreate, store: CredentialStore = Depends(get_store)):
    RegistryService.create_mtp_server(store, payload.name, payload.url)
    return SuccessResponse(success=True)
