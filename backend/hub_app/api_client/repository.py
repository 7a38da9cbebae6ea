"""
Typed CRUD access to the collections of the device-control service
"""

import logging
from typing import Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .exceptions import (
    TransportError,
    FetchError,
    CreateError,
    UpdateError,
    DeleteError,
    wrap_transport_error,
)
from .models import Document
from .transport import RetryingTransport


logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=Document)
ModelT = TypeVar("ModelT", bound=BaseModel)

ERROR = "ERROR"
ErrorSentinel = Literal["ERROR"]


def collection_path(path: str) -> str:
    """Normalize a collection path to ``name/``"""
    return path.strip("/") + "/"


def parse_model(model: Type[ModelT], response, path: str) -> ModelT:
    """Parse a JSON response body into ``model``, raising FetchError on mismatch"""
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise FetchError(
            f"Unexpected response from {path}: {e}",
            status_code=response.status_code,
            original_exception=e
        )


def parse_model_list(model: Type[ModelT], response, path: str) -> List[ModelT]:
    """Parse a JSON array response body into a list of ``model``"""
    try:
        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"expected a list, got {type(data).__name__}")
        return [model.model_validate(item) for item in data]
    except (ValueError, ValidationError) as e:
        raise FetchError(
            f"Unexpected response from {path}: {e}",
            status_code=response.status_code,
            original_exception=e
        )


class ResourceRepository(Generic[DocT]):
    """
    CRUD façade for one entity collection

    Every call goes through the shared RetryingTransport, so failures are
    classified and retried the same way for all entity kinds. The repository
    does not serialize concurrent mutations of the same document.
    """

    def __init__(
        self,
        transport: RetryingTransport,
        path: str,
        model: Type[DocT],
        include_id_on_create: bool = False
    ):
        """
        Args:
            transport: Transport shared by all repositories of a client
            path: Collection path segment, e.g. ``rooms/``
            model: Document model of the collection
            include_id_on_create: Send the document id in create bodies
                (for entities whose id is chosen by the user)
        """
        self.transport = transport
        self.path = collection_path(path)
        self.model = model
        self.include_id_on_create = include_id_on_create

    def item_path(self, document_id: str) -> str:
        return f"{self.path}{document_id}"

    async def list(self) -> List[DocT]:
        """
        Load every document of the collection

        Raises:
            FetchError: If the request fails or the response can't be parsed
        """
        try:
            response = await self.transport.execute("GET", self.path)
        except TransportError as e:
            raise wrap_transport_error(FetchError, e)
        return parse_model_list(self.model, response, self.path)

    async def list_or_error(self) -> Union[List[DocT], ErrorSentinel]:
        """
        Load every document, returning ``"ERROR"`` instead of raising

        For call sites that render a degraded view rather than failing the
        whole request.
        """
        try:
            return await self.list()
        except FetchError as e:
            logger.warning(f"Returning error sentinel for {self.path}: {e.message}")
            return ERROR

    async def create(self, document: DocT) -> None:
        """
        Create a document

        Raises:
            CreateError: With the service's explanation as message on HTTP 400,
                a generic message otherwise
        """
        body = document.to_request_body(include_id=self.include_id_on_create)
        try:
            await self.transport.execute("POST", self.path, body)
        except TransportError as e:
            if e.status_code == 400 and e.body and e.body.strip():
                raise wrap_transport_error(CreateError, e, e.body.strip())
            raise wrap_transport_error(CreateError, e)
        logger.info(f"Created document in {self.path}")

    async def update(self, document: DocT) -> None:
        """
        Update a persisted document; the id goes in the path, not the body

        Raises:
            UpdateError: If the document has no id or the request fails
        """
        if not document.id:
            raise UpdateError(f"Cannot update a document of {self.path} without id")
        try:
            await self.transport.execute("POST", self.item_path(document.id), document.to_request_body())
        except TransportError as e:
            raise wrap_transport_error(UpdateError, e)
        logger.info(f"Updated {self.item_path(document.id)}")

    async def delete(self, document_id: str) -> None:
        """
        Delete a document by id

        Raises:
            DeleteError: If the id is empty or the request fails
        """
        if not document_id:
            raise DeleteError(f"Cannot delete a document of {self.path} without id")
        try:
            await self.transport.execute("DELETE", self.item_path(document_id))
        except TransportError as e:
            raise wrap_transport_error(DeleteError, e)
        logger.info(f"Deleted {self.item_path(document_id)}")


class SingletonResource(Generic[ModelT]):
    """A resource holding at most one record, read with GET and written with POST"""

    def __init__(self, transport: RetryingTransport, path: str, model: Type[ModelT]):
        self.transport = transport
        self.path = collection_path(path)
        self.model = model

    async def get(self) -> Optional[ModelT]:
        """Load the record, None if the service has none yet"""
        try:
            response = await self.transport.execute("GET", self.path)
        except TransportError as e:
            raise wrap_transport_error(FetchError, e)
        if response.content.strip() in (b"", b"null"):
            return None
        return parse_model(self.model, response, self.path)

    async def upsert(self, record: ModelT) -> None:
        """Create or replace the record"""
        try:
            await self.transport.execute("POST", self.path, record.model_dump(mode="json"))
        except TransportError as e:
            if e.status_code == 400 and e.body and e.body.strip():
                raise wrap_transport_error(CreateError, e, e.body.strip())
            raise wrap_transport_error(CreateError, e)
        logger.info(f"Saved {self.path}")
