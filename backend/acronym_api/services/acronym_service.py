"""
Acronym API: Acronym Service (Validation + Storage Rules)
============================================================

What:  The business rules behind the four /acronym endpoints.
Why:   Keeps routes thin: they only translate HTTP to arguments and back.
How:   Each operation validates its input (raising ValidationError before
       any storage call), then talks to MongoDB through an AcronymStore and
       turns unexpected results or driver errors into application
       exceptions.

Listing Contract (look-ahead pagination):
    skip  = (page - 1) * limit
    fetch = limit + 1 records starting at skip
    more  = fetched > limit          → More-Acronyms-Matched header
    body  = first `limit` records

    Without a search term the records come back in natural order via
    find(). With one, an Atlas Search `$search` stage does fuzzy matching
    (up to `search_max_edits` character edits) over both fields.

Known non-atomic sequences:
    - duplicate check → insert_one
    - existence check → delete_one
    Two interleaving requests can slip between the check and the write.
    There is no unique index backing the duplicate rule.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from acronym_api.database import AcronymStore, id_filter
from acronym_api.exceptions import (
    AcronymAPIError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class AcronymPage:
    """One page of listing results plus the look-ahead flag."""

    records: List[Dict[str, Any]] = field(default_factory=list)
    more_results: bool = False


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """Parse a query-string integer; None when missing, non-numeric or < 1."""
    if value is None:
        return None
    # ASCII digits only: int() alone also takes "1_0" and non-Latin numerals
    text = str(value).strip()
    if not re.fullmatch(r"[0-9]+", text):
        return None
    number = int(text)
    return number if number >= 1 else None


def build_search_pipeline(
    search: str,
    skip: int,
    limit: int,
    index: str = "default",
    max_edits: int = 2,
) -> List[Dict[str, Any]]:
    """
    Aggregation pipeline for the fuzzy search path.

    `limit` is the number of documents to fetch, i.e. page size + 1.
    The projection drops `_id`.
    """
    return [
        {
            "$search": {
                "index": index,
                "text": {
                    "query": search,
                    "path": ["acronym", "definition"],
                    "fuzzy": {"maxEdits": max_edits},
                },
            }
        },
        {"$project": {"_id": 0, "acronym": 1, "definition": 1}},
        {"$skip": skip},
        {"$limit": limit},
    ]


def serialize_record(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make a MongoDB document JSON-ready (ObjectId → str)."""
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out


class AcronymService:
    """
    Stateless rules for listing, adding, updating and deleting acronyms.

    Every public method receives the request's AcronymStore; none of them
    close it (the dependency that created it does).

    Error Handling Strategy:
        Our own exceptions (404, 409, unexpected-count 500s) propagate as-is.
        Anything else raised while talking to MongoDB is wrapped in
        DatabaseError with the driver's error text in the message.
    """

    async def list_acronyms(
        self,
        store: AcronymStore,
        page: Optional[str],
        limit: Optional[str],
        search: Optional[str] = None,
        search_index: str = "default",
        search_max_edits: int = 2,
    ) -> AcronymPage:
        """
        Return one page of acronyms, optionally fuzzy-filtered by `search`.

        Raises:
            ValidationError: page/limit missing, non-numeric or below 1
            DatabaseError:   MongoDB failed
        """
        echo = {"page": page, "limit": limit, "search": search}

        page_number = parse_positive_int(page)
        page_limit = parse_positive_int(limit)
        if page_number is None or page_limit is None:
            raise ValidationError(
                message="Invalid pagination parameters -- both page and limit must be at least 1.",
                data=echo,
            )

        skip = page_limit * (page_number - 1)

        try:
            collection = store.collection
            if not search:
                cursor = collection.find().skip(skip).limit(page_limit + 1)
            else:
                cursor = collection.aggregate(
                    build_search_pipeline(
                        search,
                        skip,
                        page_limit + 1,
                        index=search_index,
                        max_edits=search_max_edits,
                    )
                )
            matches = await cursor.to_list(length=None)
        except Exception as e:
            logger.error("Could not list acronyms %s: %s", echo, e)
            raise DatabaseError(
                message=f"Could not retrieve acronyms due to error: {e}. Please try again.",
                data=echo,
                context={"error_type": type(e).__name__},
            ) from e

        return AcronymPage(
            records=[serialize_record(doc) for doc in matches[:page_limit]],
            more_results=len(matches) > page_limit,
        )

    async def add_acronym(
        self,
        store: AcronymStore,
        acronym: Optional[str],
        definition: Optional[str],
    ) -> str:
        """
        Insert a new acronym/definition pair and return its id.

        The same acronym may repeat with a different definition; only an
        exact pair (definition compared case-insensitively) is a conflict.

        Raises:
            ValidationError: either field missing or empty
            ConflictError:   the pair already exists
            DatabaseError:   insert not acknowledged, or MongoDB failed
        """
        echo = {"acronym": acronym, "definition": definition}

        if not acronym or not definition:
            raise ValidationError(
                message="Bad request: both acronym and definition are required to create new entry.",
                data=echo,
            )

        try:
            collection = store.collection

            existing = await collection.find_one(
                {
                    "acronym": acronym,
                    "definition": {
                        "$regex": f"^{re.escape(definition)}$",
                        "$options": "i",
                    },
                }
            )
            if existing:
                raise ConflictError(message="Bad request: entry already exists.", data=echo)

            result = await collection.insert_one({"acronym": acronym, "definition": definition})
            if not result.acknowledged:
                raise DatabaseError(
                    message="Acronym not added due to unknown server error.",
                    data=echo,
                )
        except AcronymAPIError:
            raise
        except Exception as e:
            logger.error("Could not add acronym %s: %s", echo, e)
            raise DatabaseError(
                message=f"Acronym not added due to error: {e}. Please try again.",
                data=echo,
                context={"error_type": type(e).__name__},
            ) from e

        inserted_id = str(result.inserted_id)
        logger.info("Acronym added: %s (%s)", acronym, inserted_id)
        return inserted_id

    async def update_acronym(
        self,
        store: AcronymStore,
        acronym_id: str,
        acronym: Optional[str] = None,
        definition: Optional[str] = None,
    ) -> None:
        """
        Change exactly one field of an existing record.

        Updating both fields at once is refused: that is a new entry, not
        an edit of this one.

        A matched-but-unmodified update (the value was already equal) is
        reported as a 500, same as any other unexpected count.

        Raises:
            ValidationError: neither or both fields supplied
            NotFoundError:   no record with this id
            DatabaseError:   nothing modified, or MongoDB failed
        """
        echo = {"_id": acronym_id, "acronym": acronym, "definition": definition}

        if not acronym and not definition:
            raise ValidationError(
                message="Bad request: acronym or definition are required to update entry.",
                data=echo,
            )
        if acronym and definition:
            raise ValidationError(
                message=(
                    "Bad request: cannot update both acronym and definition. "
                    "Please add a new entry instead."
                ),
                data=echo,
            )

        changes = {"acronym": acronym} if acronym else {"definition": definition}

        try:
            result = await store.collection.update_one(id_filter(acronym_id), {"$set": changes})

            if result.matched_count != 1:
                raise NotFoundError(
                    message="Could not find entry with the specified acronymID.",
                    data=echo,
                )
            if result.modified_count != 1:
                raise DatabaseError(
                    message="Could not update acronym due to unknown server error.",
                    data=echo,
                )
        except AcronymAPIError:
            raise
        except Exception as e:
            logger.error("Could not update acronym %s: %s", acronym_id, e)
            raise DatabaseError(
                message=f"Acronym not updated due to error: {e}. Please try again.",
                data=echo,
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Acronym %s updated: %s", acronym_id, ", ".join(changes))

    async def delete_acronym(self, store: AcronymStore, acronym_id: str) -> None:
        """
        Delete a record after checking that it exists.

        Raises:
            NotFoundError: no record with this id (nothing is deleted)
            DatabaseError: delete removed nothing, or MongoDB failed
        """
        echo = {"_id": acronym_id}

        try:
            collection = store.collection
            query = id_filter(acronym_id)

            existing = await collection.find_one(query)
            if not existing:
                raise NotFoundError(message="Acronym not found.", data=acronym_id)

            result = await collection.delete_one(query)
            if result.deleted_count != 1:
                raise DatabaseError(
                    message="Acronym not deleted due to server error.",
                    data=echo,
                )
        except AcronymAPIError:
            raise
        except Exception as e:
            logger.error("Could not delete acronym %s: %s", acronym_id, e)
            raise DatabaseError(
                message=f"Acronym not deleted due to error: {e}. Please try again.",
                data=echo,
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Acronym %s deleted", acronym_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# AcronymService holds no per-request state
acronym_service = AcronymService()
