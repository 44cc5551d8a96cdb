# subset of the burst factory ABI used by the launcher

_CURVE_DATA = {
    "components": [
        {"internalType": "uint8", "name": "curveStyle", "type": "uint8"},
        {"internalType": "uint256[]", "name": "binStepScaleFactor", "type": "uint256[]"},
        {"internalType": "uint256", "name": "percentOfLP", "type": "uint256"},
        {"internalType": "uint256", "name": "avaxAtLaunch", "type": "uint256"},
        {"internalType": "uint256", "name": "basePrice", "type": "uint256"},
    ],
    "internalType": "struct BurstFactoryV6.CurveV2",
    "name": "curveData",
    "type": "tuple",
}

_DEX_ALLOCATION = {
    "components": [
        {"internalType": "enum DexTypes.DEX", "name": "dex", "type": "uint8"},
        {"internalType": "bool", "name": "isReward", "type": "bool"},
        {"internalType": "uint256", "name": "allocation", "type": "uint256"},
    ],
    "internalType": "struct DexTypes.DexAllocation[]",
    "name": "dexAllocations",
    "type": "tuple[]",
}

BURST_FACTORY_ABI = [
    {
        "inputs": [],
        "name": "getAllCurves",
        "outputs": [
            {
                "components": [
                    {"internalType": "uint8", "name": "index", "type": "uint8"},
                    {"internalType": "uint256[]", "name": "distribution", "type": "uint256[]"},
                    _CURVE_DATA,
                ],
                "internalType": "struct BurstFactoryV6.CurveWithIndex[]",
                "name": "",
                "type": "tuple[]",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "string", "name": "tokenName", "type": "string"},
            {"internalType": "string", "name": "tokenSymbol", "type": "string"},
            {"internalType": "uint256", "name": "totalSupply_", "type": "uint256"},
            {"internalType": "uint256", "name": "tradingFee", "type": "uint256"},
            {"internalType": "uint256", "name": "maxWalletPercent_", "type": "uint256"},
            {"internalType": "string", "name": "metadataURI", "type": "string"},
            {"internalType": "uint8", "name": "curveIndex_", "type": "uint8"},
            {"internalType": "bytes32", "name": "salt", "type": "bytes32"},
            _DEX_ALLOCATION,
            {"internalType": "address", "name": "creator", "type": "address"},
        ],
        "name": "burstTokenWithCreator",
        "outputs": [{"internalType": "address", "name": "burstAddress", "type": "address"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "token", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "creator", "type": "address"},
            {"indexed": False, "internalType": "bool", "name": "whitelistEnabled", "type": "bool"},
            {"indexed": False, "internalType": "uint256", "name": "curveIndex", "type": "uint256"},
        ],
        "name": "TokenCreated",
        "type": "event",
    },
]
