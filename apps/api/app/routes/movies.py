"""Movie routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from app.routes.dependencies import get_current_identity, get_movie_service
from app.schemas.auth import Identity
from app.schemas.error import ErrorResponse
from app.schemas.movie import Movie, MovieFields
from app.services.movies import MovieService

router = APIRouter(prefix="/movies", tags=["Movies"])

# Handlers are sync so blocking backend I/O runs in the threadpool.


@router.get(
    "",
    response_model=list[Movie],
    responses={500: {"model": ErrorResponse}},
)
def list_movies(
    _identity: Annotated[Identity | None, Depends(get_current_identity)],
    service: Annotated[MovieService, Depends(get_movie_service)],
) -> list[Movie]:
    return service.list_movies()


@router.post(
    "",
    response_model=Movie,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_movie(
    payload: MovieFields,
    _identity: Annotated[Identity | None, Depends(get_current_identity)],
    service: Annotated[MovieService, Depends(get_movie_service)],
) -> Movie:
    return service.create_movie(fields=payload)


@router.get(
    "/{movieId}",
    response_model=Movie,
    responses={404: {"model": ErrorResponse}},
)
def get_movie(
    movie_id: Annotated[str, Path(alias="movieId")],
    _identity: Annotated[Identity | None, Depends(get_current_identity)],
    service: Annotated[MovieService, Depends(get_movie_service)],
) -> Movie:
    return service.get_movie(movie_id=movie_id)


@router.put(
    "/{movieId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_movie(
    movie_id: Annotated[str, Path(alias="movieId")],
    payload: MovieFields,
    _identity: Annotated[Identity | None, Depends(get_current_identity)],
    service: Annotated[MovieService, Depends(get_movie_service)],
) -> Response:
    service.update_movie(movie_id=movie_id, fields=payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{movieId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
def delete_movie(
    movie_id: Annotated[str, Path(alias="movieId")],
    _identity: Annotated[Identity | None, Depends(get_current_identity)],
    service: Annotated[MovieService, Depends(get_movie_service)],
) -> Response:
    service.delete_movie(movie_id=movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
