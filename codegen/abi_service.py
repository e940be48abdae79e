import json
import logging
from pydantic import ValidationError

from codegen.entities import AbiEvent
from core.exceptions import InvalidAbiException, MissingReferenceException


class ABIService:
    """
    Service for reading contract ABI documents into immutable event trees.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def load_events(self, abi_path: str) -> tuple[AbiEvent, ...]:
        """
        Read an ABI file and parse its events.

        Parameters
        ----------
        abi_path : str
            Path to the ABI JSON document

        Returns
        -------
        tuple[AbiEvent, ...]
            Events in ABI order

        Raises
        ------
        MissingReferenceException
            If the file does not exist
        InvalidAbiException
            If the file is not a valid ABI document
        """
        try:
            with open(abi_path, encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError as e:
            raise MissingReferenceException(f"ABI file not found: {abi_path}") from e
        except UnicodeDecodeError as e:
            raise InvalidAbiException(f"ABI file is not valid UTF-8: {abi_path}") from e

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidAbiException(f"ABI file is not valid JSON: {abi_path}") from e

        self.logger.debug(f"Loaded ABI from {abi_path}")
        return self.parse_events(document, origin=abi_path)

    def parse_events(self, document, origin: str = "<abi>") -> tuple[AbiEvent, ...]:
        """
        Parse events out of a decoded ABI document.

        Accepts a plain ABI list or a compiler artifact holding it
        under the ``abi`` key.

        Parameters
        ----------
        document : list | dict
            Decoded ABI JSON
        origin : str
            Where the document came from, used in error messages

        Returns
        -------
        tuple[AbiEvent, ...]
            Events in ABI order
        """
        if isinstance(document, dict) and "abi" in document:
            document = document["abi"]

        if not isinstance(document, list):
            raise InvalidAbiException(f"ABI must be a list of items: {origin}")

        events = []
        for item in document:
            if not isinstance(item, dict) or item.get("type") != "event":
                continue
            try:
                events.append(AbiEvent.model_validate(item))
            except ValidationError as e:
                raise InvalidAbiException(
                    f"Invalid event {item.get('name', '?')} in {origin}: {e.errors()[0]['msg']}"
                ) from e

        self.logger.debug(f"Event ABIs found in {origin}: {[e.name for e in events]}")
        return tuple(events)
