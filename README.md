# evmkit

Building blocks for an Ethereum virtual machine, in plain Python.

| Module | What it holds |
| --- | --- |
| `evmkit.specification` | `SpecId` hard-fork identifiers (`FRONTIER` … `LATEST`), `SpecId.from_name`, `SpecId.try_from_u8`, `spec_enabled` |
| `evmkit.bits` | `B160` / `B256` fixed-size byte values (`zero`, `random`, `from_hex`, `to_hex`, `from_int`, `to_int`), `to_hex`, `from_hex`, `FromHexError` |
| `evmkit.utilities` | `keccak256`, `rlp_encode`, `create_address`, `create2_address`, `hex_bytes_encode`, `hex_bytes_decode`, and constants such as `KECCAK_EMPTY`, `MAX_CODE_SIZE`, `MAX_INITCODE_SIZE`, `STACK_LIMIT` |
| `evmkit.bytecode` | `Bytecode`, `BytecodeState`, `BytecodeStateKind`, `JumpMap` |
| `evmkit.state` | `Account`, `AccountInfo`, `AccountStatus` flags, `StorageSlot` |
| `evmkit.result` | `Log`, `Output`, `SuccessResult`, `RevertResult`, `HaltResult`, `Halt`, `Eval`, `OutOfGasError`, `InvalidTransaction`, `EVMError` and its subclasses |
| `evmkit.env` | `Env`, `CfgEnv`, `BlockEnv`, `TxEnv`, `TransactTo`, `CreateScheme`, `AnalysisKind` |
| `evmkit.db` | abstract `Database`, `DatabaseCommit`, `StateComponent`, `BlockHashComponent`; `WrapDatabaseRef`; `DatabaseComponents` |
| `evmkit.precompile_types` | `PrecompileError`, `PrecompileErrorKind`, `PrecompileOutput`, `PrecompileAddress`, `calc_linear_cost_u32`, `u64_to_address` |
| `evmkit.secp256k1` | `ecrecover`, `ec_recover_run` (address 1) |
| `evmkit.hashes` | `sha256_run` (2), `ripemd160_run` (3), `identity_run` (4) |
| `evmkit.bn128` | alt_bn128 `run_add`, `run_mul`, `run_pair` and the per-fork wrappers `add_*`, `mul_*`, `pair_*` (6, 7, 8) |
| `evmkit.blake2` | BLAKE2b `compress` and the `run` precompile (9) |
| `evmkit.precompiles` | `Precompiles` sets per fork, `PrecompileSpecId` |

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Deriving a contract address:

```python
from evmkit.bits import B160
from evmkit.utilities import create_address

deployer = B160.from_hex("0x" + "11" * 20)
print(create_address(deployer, 0).to_hex())
```

Calling a precompile for a given fork:

```python
from evmkit.precompiles import Precompiles, PrecompileSpecId
from evmkit.precompile_types import u64_to_address

precompiles = Precompiles.new(PrecompileSpecId.BERLIN)
sha256 = precompiles.get(u64_to_address(2))
gas_used, digest = sha256(b"abc", 100)
```

Every precompile function takes the input bytes and a gas limit and returns
`(gas_used, output)`. It raises `PrecompileError` when the gas limit is too low
or the input is malformed; the reason is in the error's `kind`. `ec_recover_run`
is the exception for bad signatures: it returns an empty output instead.

`PrecompileSpecId.from_spec_id` maps any `SpecId` to the precompile set that
applies to it.

Validating a transaction:

```python
from evmkit.env import Env
from evmkit.specification import SpecId

env = Env()
env.validate_tx(SpecId.LATEST)  # raises InvalidTransaction on failure
```

`Env.validate_tx_against_state(account)` checks the sender's code, nonce and
balance, and `Env.validate_block_env(spec_id)` raises `PrevrandaoNotSetError`
when prevrandao is missing from a post-merge block. The relaxing switches on
`CfgEnv` (`disable_balance_check`, `disable_block_gas_limit`, `disable_eip3607`,
`disable_base_fee`) turn the matching checks off.

`DatabaseComponents` joins a `StateComponent` and a `BlockHashComponent` into a
`Database`; a failure in either is raised again as `StateComponentError` or
`BlockHashComponentError`, with the cause in `error`.

## What it does not do

- There is no bytecode interpreter: the package validates environments and
  describes results, but does not execute transactions.
- The modular exponentiation precompile (address 5) is not included, so the
  Byzantium and later sets in `Precompiles` do not hold it.
- No concrete database is provided; `Database` and the component classes are
  interfaces for you to implement.