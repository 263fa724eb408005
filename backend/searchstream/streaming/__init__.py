"""Streaming of chat turn events."""

from searchstream.streaming.base import ChatStream, StreamEventType
from searchstream.streaming.socketio_stream import SocketIOChatStream

__all__ = ["ChatStream", "SocketIOChatStream", "StreamEventType"]
