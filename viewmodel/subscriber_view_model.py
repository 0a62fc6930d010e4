"""Subscriber view-model: form state, mode switching and status messages.

The view-model runs on one asyncio loop. submit() and clear_all_or_delete()
return immediately with a Task; the storage call, the state transition and
the status message all complete on that loop. The branch, the target and
the form values are fixed when the command is issued. Storage calls issued
by one view-model run one at a time.

Modes:
  - creating: "Save" inserts a new subscriber, "Clear All" deletes every row
  - editing:  "Update" rewrites the selected subscriber, "Delete" removes it
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Coroutine, Optional

from db.exceptions import StorageError
from db.repository import SubscriberRepository
from live_data import LiveData, MutableLiveData
from schemas.subscriber import MissingField, Subscriber, SubscriberForm, validate_form
from viewmodel.event import Event
from viewmodel.observable import PropertyObservable

logger = logging.getLogger(__name__)

SAVE_TEXT = "Save"
CLEAR_ALL_TEXT = "Clear All"
UPDATE_TEXT = "Update"
DELETE_TEXT = "Delete"


class Mode(str, Enum):
    CREATING = "creating"
    EDITING = "editing"


class OperationFailure(str, Enum):
    INSERT_FAILED = "Error Occurred during Insert."
    UPDATE_FAILED = "Error Occurred during Update."
    DELETE_FAILED = "Error Occurred during Delete"
    DELETE_ALL_FAILED = "Error Occurred during Delete."


class SubscriberViewModel(PropertyObservable):
    def __init__(self, repository: SubscriberRepository):
        self._repository = repository
        self._editing: Optional[Subscriber] = None
        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

        self.input_name: MutableLiveData[Optional[str]] = MutableLiveData(None)
        self.input_email: MutableLiveData[Optional[str]] = MutableLiveData(None)
        self.save_or_update_button_text: MutableLiveData[str] = MutableLiveData(SAVE_TEXT)
        self.clear_all_or_delete_button_text: MutableLiveData[str] = MutableLiveData(CLEAR_ALL_TEXT)
        self._status_message: MutableLiveData[Event[str]] = MutableLiveData()

    # ------------------------------------------------------------------
    # State exposed to presentation
    # ------------------------------------------------------------------

    @property
    def subscribers(self) -> LiveData[list[Subscriber]]:
        return self._repository.subscribers

    @property
    def message(self) -> LiveData[Event[str]]:
        return self._status_message

    @property
    def mode(self) -> Mode:
        return Mode.CREATING if self._editing is None else Mode.EDITING

    @property
    def editing_id(self) -> Optional[int]:
        return None if self._editing is None else self._editing.id

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def begin_edit(self, subscriber: Subscriber) -> None:
        """Select subscriber for update/delete and load it into the form."""
        self._check_open()
        self.input_name.value = subscriber.name
        self.input_email.value = subscriber.email
        self._editing = subscriber
        self.save_or_update_button_text.value = UPDATE_TEXT
        self.clear_all_or_delete_button_text.value = DELETE_TEXT

    def submit(self) -> asyncio.Task:
        """Insert (creating) or update (editing) from the current form.

        Mode, target and form values are taken now; the task works on that
        snapshot even if the form changes before it runs.
        """
        self._check_open()
        return self._launch(
            self._save_or_update(self._editing, self.input_name.value, self.input_email.value)
        )

    def clear_all_or_delete(self) -> asyncio.Task:
        """Delete every subscriber (creating) or the selected one (editing)."""
        self._check_open()
        if self._editing is None:
            return self._launch(self._delete_all())
        return self._launch(self._delete(self._editing))

    async def join(self) -> None:
        """Wait until every scheduled operation has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def close(self) -> None:
        await self.join()
        self._closed = True

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def _save_or_update(
        self, target: Optional[Subscriber], name: Optional[str], email: Optional[str]
    ) -> None:
        try:
            form = validate_form(name, email)
        except MissingField as exc:
            logger.info("Submit rejected: %s missing", exc.field)
            self._notify(str(exc))
            return

        if target is None:
            await self._insert(form, name, email)
        else:
            await self._update(target, form)

    async def _insert(self, form: SubscriberForm, name: Optional[str], email: Optional[str]) -> None:
        async with self._lock:
            try:
                row_id = await self._repository.insert(Subscriber(name=form.name, email=form.email))
            except StorageError as exc:
                logger.warning("Insert failed: %s", exc)
                row_id = -1

            if row_id < 0:
                self._notify(OperationFailure.INSERT_FAILED.value)
                return

            logger.info("Inserted subscriber id=%s", row_id)
            # the form may already hold a newer edit
            if self._editing is None and self._form_shows(name, email):
                self._clear_form()
            self._notify(f"Subscriber Inserted Successfully {row_id}")

    async def _update(self, target: Subscriber, form: SubscriberForm) -> None:
        async with self._lock:
            candidate = target.model_copy(update={"name": form.name, "email": form.email})
            count = await self._count_or_zero(self._repository.update(candidate), "Update")

            if count <= 0:
                self._notify(OperationFailure.UPDATE_FAILED.value)
                return

            target.name = candidate.name
            target.email = candidate.email
            logger.info("Updated subscriber id=%s", target.id)
            if self._editing is target:
                self._reset()
            self._notify(f"{count} Subscriber Updated Successfully")

    async def _delete(self, target: Subscriber) -> None:
        async with self._lock:
            count = await self._count_or_zero(self._repository.delete(target), "Delete")

            if count <= 0:
                self._notify(OperationFailure.DELETE_FAILED.value)
                return

            logger.info("Deleted subscriber id=%s", target.id)
            if self._editing is target:
                self._reset()
            self._notify(f"{count} Subscriber Deleted Successfully")

    async def _delete_all(self) -> None:
        async with self._lock:
            count = await self._count_or_zero(self._repository.delete_all(), "Delete all")

            if count <= 0:
                self._notify(OperationFailure.DELETE_ALL_FAILED.value)
                return

            logger.info("Deleted all %s subscribers", count)
            self._notify(f"All {count} Subscribers Deleted Successfully")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _count_or_zero(self, call: Coroutine[Any, Any, int], label: str) -> int:
        try:
            return await call
        except StorageError as exc:
            logger.warning("%s failed: %s", label, exc)
            return 0

    def _launch(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Subscriber operation crashed", exc_info=task.exception())

    def _form_shows(self, name: Optional[str], email: Optional[str]) -> bool:
        return self.input_name.value == name and self.input_email.value == email

    def _clear_form(self) -> None:
        self.input_name.value = None
        self.input_email.value = None

    def _reset(self) -> None:
        self._clear_form()
        self._editing = None
        self.save_or_update_button_text.value = SAVE_TEXT
        self.clear_all_or_delete_button_text.value = CLEAR_ALL_TEXT

    def _notify(self, text: str) -> None:
        self._status_message.value = Event(text)

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("SubscriberViewModel is closed")
