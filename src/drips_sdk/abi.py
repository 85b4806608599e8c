"""
Contract ABIs for the Drips EVM contracts.

Only the functions used by the SDK are included. Derived from
src/DripsHub.sol, src/AddressDriver.sol and OpenZeppelin's IERC20.
"""

_DRIPS_RECEIVER_COMPONENTS = [
    {"name": "userId", "type": "uint256"},
    {"name": "config", "type": "uint256"},
]

_SPLITS_RECEIVER_COMPONENTS = [
    {"name": "userId", "type": "uint256"},
    {"name": "weight", "type": "uint32"},
]

_DRIPS_HISTORY_COMPONENTS = [
    {"name": "dripsHash", "type": "bytes32"},
    {
        "name": "receivers",
        "type": "tuple[]",
        "components": _DRIPS_RECEIVER_COMPONENTS,
    },
    {"name": "updateTime", "type": "uint32"},
    {"name": "maxEnd", "type": "uint32"},
]

# DripsHub ABI
DRIPS_HUB_ABI = [
    # Read functions
    {
        "type": "function",
        "name": "cycleSecs",
        "inputs": [],
        "outputs": [{"type": "uint32"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "totalBalance",
        "inputs": [{"name": "erc20", "type": "address"}],
        "outputs": [{"name": "balance", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "receivableDripsCycles",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [{"name": "cycles", "type": "uint32"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "receiveDripsResult",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "maxCycles", "type": "uint32"},
        ],
        "outputs": [
            {"name": "receivableAmt", "type": "uint128"},
            {"name": "receivableCycles", "type": "uint32"},
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "squeezeDripsResult",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "senderId", "type": "uint256"},
            {"name": "historyHash", "type": "bytes32"},
            {
                "name": "dripsHistory",
                "type": "tuple[]",
                "components": _DRIPS_HISTORY_COMPONENTS,
            },
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "splittable",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "collectable",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "dripsState",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
        ],
        "outputs": [
            {"name": "dripsHash", "type": "bytes32"},
            {"name": "dripsHistoryHash", "type": "bytes32"},
            {"name": "updateTime", "type": "uint32"},
            {"name": "balance", "type": "uint128"},
            {"name": "maxEnd", "type": "uint32"},
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "balanceAt",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {
                "name": "receivers",
                "type": "tuple[]",
                "components": _DRIPS_RECEIVER_COMPONENTS,
            },
            {"name": "timestamp", "type": "uint32"},
        ],
        "outputs": [{"name": "balance", "type": "uint128"}],
        "stateMutability": "view",
    },
    # Write functions
    {
        "type": "function",
        "name": "receiveDrips",
        "inputs": [
            {"name": "userId", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "maxCycles", "type": "uint32"},
        ],
        "outputs": [{"name": "receivedAmt", "type": "uint128"}],
        "stateMutability": "nonpayable",
    },
]

# AddressDriver ABI
ADDRESS_DRIVER_ABI = [
    # Read functions
    {
        "type": "function",
        "name": "calcUserId",
        "inputs": [{"name": "userAddr", "type": "address"}],
        "outputs": [{"name": "userId", "type": "uint256"}],
        "stateMutability": "view",
    },
    # Write functions
    {
        "type": "function",
        "name": "collect",
        "inputs": [
            {"name": "erc20", "type": "address"},
            {"name": "transferTo", "type": "address"},
        ],
        "outputs": [{"name": "amt", "type": "uint128"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "give",
        "inputs": [
            {"name": "receiver", "type": "uint256"},
            {"name": "erc20", "type": "address"},
            {"name": "amt", "type": "uint128"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "setDrips",
        "inputs": [
            {"name": "erc20", "type": "address"},
            {
                "name": "currReceivers",
                "type": "tuple[]",
                "components": _DRIPS_RECEIVER_COMPONENTS,
            },
            {"name": "balanceDelta", "type": "int128"},
            {
                "name": "newReceivers",
                "type": "tuple[]",
                "components": _DRIPS_RECEIVER_COMPONENTS,
            },
            {"name": "transferTo", "type": "address"},
        ],
        "outputs": [{"name": "realBalanceDelta", "type": "int128"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "setSplits",
        "inputs": [
            {
                "name": "receivers",
                "type": "tuple[]",
                "components": _SPLITS_RECEIVER_COMPONENTS,
            },
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "emitUserMetadata",
        "inputs": [
            {"name": "key", "type": "uint256"},
            {"name": "value", "type": "bytes"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]

# ERC20 ABI (allowance management)
ERC20_ABI = [
    {
        "type": "function",
        "name": "allowance",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "approve",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"type": "bool"}],
        "stateMutability": "nonpayable",
    },
]
