# File: src/device.py
"""Block device - composes board data, catalog, link and dispatcher."""

from boards import get_board
from catalog import get_catalog
from catalog.export import catalog_to_dict
from managers import CommandDispatcher, InterruptManager
from transport import BoardLink
from utilities.config import DEFAULT_CONFIG, apply_logging, resolve_platform
from utilities.logger import BlockLogger

TAG = "DEVC"


class BlockDevice:
    """One board variant as the editor host sees it.

    Public Interface:
        board: BoardProfile - variant data (pins, link parameters, upload ids)
        catalog: Catalog - frozen block catalog for the board
        peripheral: BasePeripheral - board command surface (a BoardLink
            over ``transport`` unless one is injected)
        interrupts: InterruptManager - per-pin interrupt registrations
        dispatcher: CommandDispatcher - runs blocks
    """

    def __init__(self, transport=None, config=None, peripheral=None):
        if config is None:
            config = DEFAULT_CONFIG.copy()
        self.config = config
        apply_logging(config)

        self.board = get_board(config.get("board", DEFAULT_CONFIG["board"]))
        self.platform = resolve_platform(config)
        self.catalog = get_catalog(self.board)

        if peripheral is None:
            if transport is None:
                raise ValueError("BlockDevice needs a transport or a peripheral")
            peripheral = BoardLink(transport, self.board)
        self.peripheral = peripheral

        self.interrupts = InterruptManager(self.peripheral)
        self.dispatcher = CommandDispatcher(self.catalog, self.peripheral, self.interrupts)
        self._running = False

        BlockLogger.info(TAG, f"{self.board.name} ready ({len(self.catalog.opcodes)} blocks)")

    @property
    def running(self):
        return self._running

    def get_info(self):
        """Identity, link and upload data the host needs to connect and flash."""
        return {
            "id": self.board.device_id,
            "name": self.board.name,
            "pnpidList": list(self.board.pnp_ids),
            "serialConfig": dict(self.board.serial_config),
            "upload": {
                "type": self.board.upload["type"],
                "fqbn": self.board.fqbn_for(self.platform),
            },
        }

    def get_categories(self):
        """Category definitions for the editor host."""
        return catalog_to_dict(self.catalog)

    async def start(self):
        """Start the link worker and interrupt delivery."""
        if self._running:
            return
        if isinstance(self.peripheral, BoardLink):
            self.peripheral.start()
        self.interrupts.start()
        self._running = True
        BlockLogger.info(TAG, f"{self.board.device_id} started")

    async def stop(self):
        """Stop interrupt delivery, then the link. Pending requests fail."""
        if not self._running:
            return
        self._running = False
        await self.interrupts.stop()
        if isinstance(self.peripheral, BoardLink):
            await self.peripheral.stop()
        BlockLogger.info(TAG, f"{self.board.device_id} stopped")

    async def run_block(self, opcode, args=None, body=None):
        """Execute one block; see CommandDispatcher.execute."""
        return await self.dispatcher.execute(opcode, args, body)
