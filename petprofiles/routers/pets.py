# petprofiles/routers/pets.py
from fastapi import APIRouter, Depends, Request, Response, status
from typing import List

from ..config import get_settings
from ..db import get_pet_repository
from ..middleware.rate_limit import apply_rate_limit
from ..repository import PetRepository
from ..schemas.pet import PetCreate, PetOut, PetPatch
from ..utils import to_out

router = APIRouter()
settings = get_settings()


@router.get("", response_model=List[PetOut])
@router.get("/", response_model=List[PetOut], include_in_schema=False)
async def retrieve_pets(repo: PetRepository = Depends(get_pet_repository)):
    docs = await repo.find_all()
    return [to_out(d) for d in docs]


@router.get("/types/{pet_type}", response_model=List[PetOut])
async def retrieve_pets_by_type(pet_type: str, repo: PetRepository = Depends(get_pet_repository)):
    docs = await repo.find_by_type(pet_type)
    return [to_out(d) for d in docs]


@router.get("/{pet_id}", response_model=PetOut)
async def retrieve_pet_by_id(pet_id: str, repo: PetRepository = Depends(get_pet_repository)):
    # id mal formado -> 400, inexistente -> 404 (handlers en main.py)
    return to_out(await repo.find_by_id(pet_id))


@router.post("", response_model=PetOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=PetOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_pet(
    payload: PetCreate,
    request: Request,
    repo: PetRepository = Depends(get_pet_repository),
):
    apply_rate_limit(request, settings.write_rate_limit)
    doc = await repo.insert(payload.model_dump())
    return to_out(doc)


@router.patch("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_pet(
    pet_id: str,
    payload: PetPatch,
    request: Request,
    repo: PetRepository = Depends(get_pet_repository),
):
    apply_rate_limit(request, settings.write_rate_limit)
    # merge patch: solo las claves presentes en el cuerpo
    await repo.update_by_id(pet_id, payload.model_dump(exclude_unset=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pet(
    pet_id: str,
    request: Request,
    repo: PetRepository = Depends(get_pet_repository),
):
    apply_rate_limit(request, settings.write_rate_limit)
    await repo.delete_by_id(pet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
