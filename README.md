# softfloat

Software implementations of IEEE-754 single (binary32) and double (binary64)
precision arithmetic, done entirely with integer operations on the bit
patterns. The results are bit-exact. That makes the package useful as a
reference when you check a runtime library, an emulator or an FPU model, and
when you need to know exactly how a float operation rounds.

## What is included

| Module              | Contents                                                                  |
|---------------------|---------------------------------------------------------------------------|
| `softfloat.format`  | `FloatFormat` (field layout, masks, `to_bits`, `from_bits`, `normalize`, …), the `F32` and `F64` formats, and `leading_zeros` |
| `softfloat.add`     | `add`, `sub` on bit patterns; `addsf3`, `adddf3`, `subsf3`, `subdf3` on floats |
| `softfloat.mul`     | `mul` on bit patterns; `mulsf3`, `muldf3` on floats                       |
| `softfloat.div`     | `div32`, `div64` on bit patterns; `divsf3`, `divdf3` on floats            |
| `softfloat.pow`     | `powi` on bit patterns; `powisf2`, `powidf2` (a float raised to a 32-bit signed integer power) |
| `softfloat.cmp`     | `Comparison`, `compare`, `unordered`, `lesf2` … `gtdf2`, `aeabi_fcmp*` / `aeabi_dcmp*` |
| `softfloat.conv`    | integer to float (`floatunsisf`, `floatdidf`, `floattisf`, …) and float to integer (`fixsfsi`, `fixunsdfdi`, `fixdfti`, …), with the `u*_to_f*_bits` helpers |
| `softfloat.extend`  | `extend`, `extendsfdf2` (single to double)                                |
| `softfloat.trunc`   | `truncate`, `truncdfsf2` (double to single)                               |

The routine names follow the usual runtime-library conventions: `sf` means
single precision, `df` double precision, `si`/`di`/`ti` 32/64/128-bit
integers, and a `uns` or `un` prefix means unsigned.

Two layers are offered. The generic functions (`add(fmt, a, b)`,
`mul(fmt, a, b)`, `div32(a, b)`, `compare(fmt, a, b)`, `extend(src, dst, a)`,
…) take and return bit patterns as plain non-negative ints. The named routines
(`adddf3`, `divsf3`, `truncdfsf2`, …) take and return Python floats and convert
through `FloatFormat.to_bits` / `from_bits`.

## Behaviour worth knowing

- Addition, subtraction, multiplication, the format conversions and the
  integer-to-float conversions round to nearest, ties to even.
- An arithmetic operation with a NaN operand gives a quiet NaN. `inf - inf`,
  `0 * inf`, `0 / 0` and `inf / inf` give the canonical quiet NaN.
- Division rounds normal results to nearest and flushes results that would be
  subnormal to a signed zero.
- `powi` uses repeated squaring with `mul`; a negative exponent takes the
  reciprocal of the positive power with the division routine.
- Float to integer conversions truncate toward zero and saturate. Values too
  large for the target type give its maximum or minimum, and NaN gives 0.
  Negative inputs to the unsigned conversions give 0.
- The comparison routines return three-way results. The `le`/`lt`/`eq`/`ne`
  family reports an unordered pair (at least one NaN) as `1`, and the
  `ge`/`gt` family reports it as `-1`. `unordsf2`/`unorddf2` and the
  `aeabi_*cmp*` routines return `1` or `0`.
- Single-precision routines first round their Python float arguments to
  binary32; a finite value too large for binary32 raises `OverflowError`.
  Integers or bit patterns that do not fit the stated width raise `ValueError`.

## Example

```python
from softfloat.add import adddf3
from softfloat.cmp import ledf2
from softfloat.conv import floatsidf
from softfloat.format import F32
from softfloat.mul import mul

adddf3(1.5, 2.25)      # 3.75
ledf2(1.0, 2.0)        # -1
floatsidf(-7)          # -7.0
hex(mul(F32, F32.to_bits(1.5), F32.to_bits(2.0)))   # '0x40400000' (3.0)
```

## What it does not do

This is a library only; it has no command-line tool. It covers the binary32
and binary64 formats and round-to-nearest-even only: there are no other
rounding modes, no exception flags, and no half or quadruple precision.

## Running the tests

```
pip install -e ".[test]"
pytest
```