"""HTTP and Socket.IO boundary."""
