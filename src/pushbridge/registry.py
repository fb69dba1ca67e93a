
import threading


class Registry:
    """ The :class:`Registry` maps a (channel, event) pair to the single
        callback bound to it. It is shared between the code issuing bind
        requests and the dispatcher handling inbound notifications; the
        latter runs on the transport's notification thread, hence the lock.

        Keys are tuples, compared structurally: the channel 'a' with the
        event 'bc' is not the same binding as the channel 'ab' with the
        event 'c'.
    """

    def __init__(self):

        self._callbacks = dict()
        self._lock = threading.Lock()


    def __contains__(self, key):
        self._lock.acquire()
        found = key in self._callbacks
        self._lock.release()
        return found


    def __len__(self):
        self._lock.acquire()
        length = len(self._callbacks)
        self._lock.release()
        return length


    def __repr__(self):
        self._lock.acquire()
        keys = sorted(self._callbacks.keys())
        self._lock.release()
        return 'registry.Registry: ' + repr(keys)


    def register(self, channel_name, event_name, callback):
        """ Bind *callback* to the *channel_name*, *event_name* pair. Any
            existing binding for the same pair is silently replaced.
        """

        if not callable(callback):
            raise TypeError('callback must be callable')

        key = (channel_name, event_name)

        self._lock.acquire()
        self._callbacks[key] = callback
        self._lock.release()


    def unregister(self, channel_name, event_name):
        """ Remove the binding, if any, for the *channel_name*, *event_name*
            pair. The removed callback is returned; None is returned if there
            was nothing to remove.
        """

        key = (channel_name, event_name)

        self._lock.acquire()
        callback = self._callbacks.pop(key, None)
        self._lock.release()

        return callback


    def lookup(self, channel_name, event_name):
        """ Return the callback bound to the *channel_name*, *event_name*
            pair, or None if there is no such binding.
        """

        key = (channel_name, event_name)

        self._lock.acquire()
        try:
            callback = self._callbacks[key]
        except KeyError:
            callback = None
        self._lock.release()

        return callback


    def bindings(self, channel_name):
        """ Return a sorted list of the event names bound on *channel_name*.
        """

        self._lock.acquire()
        events = [event for channel, event in self._callbacks if channel == channel_name]
        self._lock.release()

        events.sort()
        return events


    def clear(self, channel_name):
        """ Remove every binding for *channel_name*. The event names that were
            bound are returned as a sorted list.
        """

        self._lock.acquire()
        keys = [key for key in self._callbacks if key[0] == channel_name]
        for key in keys:
            del self._callbacks[key]
        self._lock.release()

        events = [key[1] for key in keys]
        events.sort()
        return events


# end of class Registry


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
