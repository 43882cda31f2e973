"""
pipefile Test Suite.

Test Hierarchy:
├── unit/                         # In-memory collaborators only
│   ├── test_file_package.py      # Value objects, content union, exceptions
│   ├── test_file_entity.py       # Construction, state, destination, dependencies
│   ├── test_file_io.py           # read_into / materialize / persist contracts
│   ├── test_streams.py           # Read streams, sinks, write stream lifecycle
│   └── test_config.py            # PipeFileConfig and global config
│
└── integration/                  # Real disk through aiofiles
    ├── test_local_read.py        # Lazy reads, materialize from disk
    └── test_local_persist.py     # Unique writes, force, {#} pattern, concat

Run all tests:
    pytest tests/test_pipefile/ -v
"""
