"""Postal code (CEP) lookup used by the address form."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...schemas.delivery import PostalAddressModel
from ...services.geocoding import ViaCepClient, normalize_cep
from ..dependencies import get_cep_client

router = APIRouter(prefix="/cep", tags=["cep"])


@router.get("/{cep}", response_model=PostalAddressModel, status_code=status.HTTP_200_OK)
def lookup_cep(cep: str, client: ViaCepClient = Depends(get_cep_client)) -> PostalAddressModel:
    if normalize_cep(cep) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CEP must have 8 digits.")
    address = client.lookup(cep)
    if address is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"CEP {cep} not found.")
    return PostalAddressModel.from_domain(address)
