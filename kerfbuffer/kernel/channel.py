import weakref
from collections import deque
from datetime import datetime
from typing import Callable, Dict, Optional


class Channel:
    """
    Observer pattern implementation for messaging.

    Channels are named message sinks. Sending a message to a channel forwards it to every
    registered watcher and, if requested, keeps it in a bounded buffer that is replayed to
    watchers attached later.

    Usage:
        channel = Channel("offset", buffer_size=100, timestamp=True)
        channel.watch(print)  # Add watcher
        channel.watch(my_func, weak=True)  # Add weak reference watcher
        if channel:
            channel(f"Expensive {message}")  # Only formatted if someone listens
    """

    def __init__(
        self,
        name: str,
        buffer_size: int = 0,
        line_end: Optional[str] = None,
        timestamp: bool = False,
    ):
        self.watchers = []
        self.name = name
        self.buffer_size = buffer_size
        self.line_end = line_end
        self.timestamp = timestamp
        self.buffer = None if buffer_size == 0 else deque(maxlen=buffer_size)
        self.errors = 0

    def __repr__(self):
        return f"Channel({repr(self.name)}, buffer_size={str(self.buffer_size)}, line_end={repr(self.line_end)})"

    def __call__(self, message: str, *args, indent: Optional[bool] = True, **kwargs):
        if self.line_end is not None:
            message = message + self.line_end
        if indent:
            message = "    " + message.replace("\n", "\n    ")
        if self.timestamp:
            ts = datetime.now().strftime("[%H:%M:%S] ")
            message = ts + message.replace("\n", f"\n{ts}")
        for w in self.watchers[:]:
            self._call_watcher(w, message)
        if self.buffer is not None:
            self.buffer.append(message)

    def __len__(self):
        return self.buffer_size

    def __iadd__(self, other):
        self.watch(other)
        return self

    def __isub__(self, other):
        self.unwatch(other)
        return self

    def __bool__(self):
        """
        The truthy value of the channel reflects whether sent data will actually go anywhere.
        Callers test it before building messages, so a channel nobody listens to costs nothing.
        """
        return bool(self.watchers) or self.buffer_size != 0

    def watch(self, monitor_function: Callable, weak: bool = False):
        """
        Add a watcher function to this channel.

        Args:
            monitor_function: The function to call when messages are sent
            weak: If True, use a weak reference to the function
        """
        for q in self.watchers:
            if q is monitor_function:
                return
            if isinstance(q, weakref.ref) and q() is monitor_function:
                return
        if weak:
            try:
                self.watchers.append(weakref.ref(monitor_function, self._watcher_died))
            except TypeError:
                # Builtins and some callables refuse weak references.
                self.watchers.append(monitor_function)
        else:
            self.watchers.append(monitor_function)
        if self.buffer is not None:
            for line in list(self.buffer):
                monitor_function(line)

    def unwatch(self, monitor_function: Callable):
        """Remove a watcher function from this channel."""
        for w in self.watchers[:]:
            if w is monitor_function or (
                isinstance(w, weakref.ref) and w() is monitor_function
            ):
                self.watchers.remove(w)

    def _call_watcher(self, watcher, message):
        if isinstance(watcher, weakref.ref):
            watcher_func = watcher()
            if watcher_func is None:
                self._watcher_died(watcher)
                return
        else:
            watcher_func = watcher
        try:
            watcher_func(message)
        except Exception:
            # A broken watcher never breaks the sender.
            self.errors += 1

    def _watcher_died(self, ref):
        try:
            self.watchers.remove(ref)
        except ValueError:
            pass

    def resize_buffer(self, new_size: int):
        """
        Resize the message buffer. 0 disables buffering.
        """
        self.buffer_size = new_size
        if new_size == 0:
            self.buffer = None
        elif self.buffer is None:
            self.buffer = deque(maxlen=new_size)
        else:
            self.buffer = deque(self.buffer, maxlen=new_size)


_channels: Dict[str, Channel] = {}


def get_channel(name: str, **kwargs) -> Channel:
    """
    Returns the channel registered under name, creating it on first use.

    Keyword arguments are only applied when the channel is created.
    """
    try:
        return _channels[name]
    except KeyError:
        channel = Channel(name, **kwargs)
        _channels[name] = channel
        return channel
