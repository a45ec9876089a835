"""Message class for board-link communication."""


class Message:
    """Represents one board-link message independent of transport.

    A Message contains the logical components of communication:
    - command: Board command (e.g., "PIN_MODE", "ANALOG_IN", "INTERRUPT")
    - payload: Tuple of argument values (e.g., ("2", "OUTPUT"))

    The Message class is transport-agnostic and doesn't know about
    framing, checksums or the serial byte layout.
    """

    def __init__(self, command, payload=()):
        """Initialize a Message.

        Parameters:
            command (str): Board command name.
            payload (tuple|list|str|int|float|None): Command arguments. A single
                scalar is wrapped into a one-item tuple, None means no arguments.
        """
        self.command = command
        if payload is None:
            payload = ()
        elif not isinstance(payload, (tuple, list)):
            payload = (payload,)
        self.payload = tuple(payload)

    @property
    def value(self):
        """First payload item, the usual shape of a reply."""
        return self.payload[0] if self.payload else None

    def __repr__(self):
        """String representation for debugging."""
        return f"Message(cmd={self.command}, payload={self.payload})"

    def __eq__(self, other):
        if not isinstance(other, Message):
            return False
        return self.command == other.command and self.payload == other.payload
