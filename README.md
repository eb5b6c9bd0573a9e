# cachesim

`cachesim` simulates a set-associative cache from a trace. You give it a binary
file of 32-bit addresses, and it passes each address through a cache with the
geometry and replacement policy you choose. It counts hits and misses. It also
sorts each miss as compulsory, conflict or capacity.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Command line

```
cache_simulator <nsets> <bsize> <assoc> <substitution> <flag_out> <input_file>
```

- `nsets` is the number of sets, and `bsize` is the block size in bytes. Both
  should be powers of two. The index and offset bit counts are floor(log2) of
  these values.
- `assoc` is the number of ways in each set.
- `substitution` is the replacement policy. Only its first letter is read:
  `f` means FIFO, `l` means LRU and `r` means random. Any other value prints
  `Substituição inválida`.
- `flag_out` chooses the report format:
  - `0` prints a detailed, labelled report. The labels are in Portuguese.
  - `1` prints one line with these fields: access count, hit rate, miss rate,
    compulsory miss rate, capacity miss rate and conflict miss rate. Each rate
    has four decimals.
  - Any other value prints nothing.
- `input_file` is a binary trace of unsigned 32-bit addresses, stored
  little-endian. If the file ends with a partial word, that word is ignored.

If the number of arguments is wrong, the command prints a usage message and
exits with status 1. It also exits with status 1 if a numeric argument is
invalid, if the policy is unknown, or if the trace file cannot be opened.
When it has no accesses, or no misses, the affected rates are shown as `nan`.

For example, a direct-mapped cache with 256 sets of 4-byte blocks, random
replacement and the one-line report:

```
cache_simulator 256 4 1 r 1 trace.bin
```

The command line does not take a seed for random replacement. Each run uses a
new random generator.

## Library use

```python
from cachesim.simulator import CacheGeometry, simulate_file

geometry = CacheGeometry(nsets=256, bsize=4, assoc=1)
result = simulate_file("trace.bin", geometry, "l", seed=0)
print(result.accesses, result.hit_rate, result.miss_rate)
```

To drive the cache yourself, follow these steps:

1. Build a policy with `cachesim.policies.make_policy(name, nsets, assoc, rng)`.
   The policy classes are `FifoPolicy`, `LruPolicy` and `RandomPolicy`.
2. Pass the policy to `CacheSimulator(geometry, policy)`.
3. Feed the simulator addresses with `access(address)` or `run(addresses)`.
   `access` returns `True` on a hit.
4. Call `result()` to get a `SimulationResult`.

A `SimulationResult` holds these counts: `accesses`, `hits`, `misses`,
`compulsory`, `conflict` and `capacity`. It also gives these rates:
`hit_rate`, `miss_rate`, `compulsory_rate`, `conflict_rate` and
`capacity_rate`.

`CacheGeometry.split(address)` returns `(tag, index, offset)`. The geometry also
provides `index_bits`, `offset_bits`, `tag_bits` and `size`.

`read_addresses(stream)` yields the addresses from an open binary trace.

## Behaviour notes

- **FIFO** replaces the ways of each set in round-robin order.
- **LRU** keeps an age for each way and evicts the oldest way. When ages are
  equal, it evicts the lowest way. Ages are updated only when a block is filled
  on a miss. Hits do not refresh them.
- **Random** picks a way uniformly at random.
- **Miss classification:**
  - A miss is **compulsory** if the target set still has an empty way.
  - Otherwise it is **conflict** if `assoc < nsets`.
  - Otherwise it is **capacity**.

## What it does not do

The cache stores only tags and valid states. It does not model data, writes,
write policies, dirty blocks or multiple cache levels. Every trace entry is a
plain lookup.