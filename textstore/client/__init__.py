from textstore.client.models import Entry, Session, AuthEvent
from textstore.client.session import SessionMonitor
from textstore.client.cache import EntryCache
from textstore.client.mutations import MutationPipeline
from textstore.client.editor import EntryEditor, EditorDraft, EditorMode
from textstore.client.notifications import Notification, NotificationSink, LoggingNotificationSink
from textstore.client.screen import EntriesScreen, ScreenState
from textstore.client.http import TextStoreClient, HttpAuth, HttpEntryStore, SessionStorage

__all__ = [
    "Entry", "Session", "AuthEvent",
    "SessionMonitor",
    "EntryCache",
    "MutationPipeline",
    "EntryEditor", "EditorDraft", "EditorMode",
    "Notification", "NotificationSink", "LoggingNotificationSink",
    "EntriesScreen", "ScreenState",
    "TextStoreClient", "HttpAuth", "HttpEntryStore", "SessionStorage",
]
