"""Base transport interface for the board link."""


class BaseTransport:
    """Abstract base class for transport implementations.

    Transport classes own the physical layer concerns:
    - Opening the serial port with the board's link parameters
    - Framing and serialisation of Message objects
    - Serialising access to the physical channel across callers

    The board link works with Message objects only and never assumes it is
    the only caller of a transport.
    """

    def send(self, message):
        """Hand a message to the transport for transmission.

        Parameters:
            message (Message): The message to send.

        Raises:
            NotImplementedError: Must be implemented by subclass.
        """
        raise NotImplementedError("Subclass must implement send()")

    async def receive(self):
        """Wait for the next message from the board.

        Returns:
            Message: The next received message.

        Raises:
            NotImplementedError: Must be implemented by subclass.
        """
        raise NotImplementedError("Subclass must implement receive()")

    def clear_buffer(self):
        """Drop any buffered inbound data.

        Raises:
            NotImplementedError: Must be implemented by subclass.
        """
        raise NotImplementedError("Subclass must implement clear_buffer()")
