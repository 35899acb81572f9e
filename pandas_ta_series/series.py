# -*- coding: utf-8 -*-
"""Lazy, version-cached Series over a BarStore.

A ``Series`` is a handle into a ``SeriesArena``: a flat table of graph
nodes owned by one store. A node only ever references nodes created before
it, so handles are a topological order and evaluation is a simple forward
sweep over the stale part of the graph (no recursion, no depth limit).
Nodes are reference counted and dropped once no Series or node reads them.

Each node caches ``(cached_version, cached)``; the cache is valid while
``cached_version == store.version``. Reads never mutate the store.
"""
from __future__ import annotations

import warnings
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from pandas_ta_series import kernels
from pandas_ta_series.logging_config import get_logger
from pandas_ta_series.maps import BAR_FIELDS

logger = get_logger("series")


class OpCode(Enum):
    # Leaves
    FIELD = "field"
    VALUES = "values"
    CONSTANT = "constant"
    FOLD = "fold"
    # Unary
    NEG = "neg"
    ABS = "abs"
    NOT = "not"
    OFFSET = "offset"
    PICK = "pick"
    # Binary arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    MAX2 = "max"
    MIN2 = "min"
    # Comparisons (1.0 / 0.0)
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"
    EQ = "eq"
    NE = "ne"
    # Boolean (1.0 / 0.0)
    AND = "and"
    OR = "or"
    # Compiled window / multi-input kernels
    KERNEL = "kernel"


# ---------------------------------------------------------------------------
# Element-wise semantics
# ---------------------------------------------------------------------------

def _truthy(x: np.ndarray) -> np.ndarray:
    """NaN and 0 are false."""
    return (x != 0.0) & ~np.isnan(x)


def _div(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        out = a / b
    out[b == 0.0] = np.nan
    return out


def _mod(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        out = np.fmod(a, b)
    out[b == 0.0] = np.nan
    return out


def _compare(fn: Callable) -> Callable[[np.ndarray, np.ndarray], np.ndarray]:
    def compare(a: np.ndarray, b: np.ndarray) -> np.ndarray:
        with np.errstate(invalid="ignore"):
            out = fn(a, b)
        out &= ~(np.isnan(a) | np.isnan(b))
        return out.astype(np.float64)
    return compare


_BINARY: Dict[OpCode, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    OpCode.ADD: np.add,
    OpCode.SUB: np.subtract,
    OpCode.MUL: np.multiply,
    OpCode.DIV: _div,
    OpCode.MOD: _mod,
    OpCode.MAX2: np.maximum,
    OpCode.MIN2: np.minimum,
    OpCode.GT: _compare(np.greater),
    OpCode.GE: _compare(np.greater_equal),
    OpCode.LT: _compare(np.less),
    OpCode.LE: _compare(np.less_equal),
    OpCode.EQ: _compare(np.equal),
    OpCode.NE: _compare(np.not_equal),
    OpCode.AND: lambda a, b: (_truthy(a) & _truthy(b)).astype(np.float64),
    OpCode.OR: lambda a, b: (_truthy(a) | _truthy(b)).astype(np.float64),
}

_UNARY: Dict[OpCode, Callable[[np.ndarray], np.ndarray]] = {
    OpCode.NEG: np.negative,
    OpCode.ABS: np.abs,
    OpCode.NOT: lambda a: (~_truthy(a)).astype(np.float64),
}


def _shift(x: np.ndarray, n: int) -> np.ndarray:
    out = np.full(x.size, np.nan)
    if n == 0:
        out[:] = x
    elif n < x.size:
        out[n:] = x[:-n]
    return out


def _fit(values: np.ndarray, n: int) -> np.ndarray:
    """Pad with NaN or truncate *values* to *n* bars."""
    if values.size == n:
        return values.copy()
    out = np.full(n, np.nan)
    m = min(n, values.size)
    out[:m] = values[:m]
    return out


# ---------------------------------------------------------------------------
# Arena
# ---------------------------------------------------------------------------

@dataclass
class _Node:
    op: OpCode
    inputs: Tuple[int, ...] = ()
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    cached_version: int = -1
    cached: Optional[np.ndarray] = None
    compute_count: int = 0
    refs: int = 0


class SeriesArena:
    """Node storage for all Series derived from one BarStore.

    A node is referenced by every live ``Series`` handle on it and by every
    node reading it. When the count drops to zero the node and its cached
    array are dropped and the release moves on to its inputs. Handles are
    never reused, so increasing handles remain a topological order.
    """

    def __init__(self, store) -> None:
        self.store = store
        self._nodes: Dict[int, _Node] = {}
        self._next = 0

    def __len__(self) -> int:
        return len(self._nodes)

    def add(self, op: OpCode, inputs: Sequence[int] = (), args: Sequence[Any] = (),
            kwargs: Optional[Dict[str, Any]] = None) -> int:
        for h in inputs:
            if h not in self._nodes:
                raise ValueError(f"Unknown node handle {h}")
        for h in inputs:
            self._nodes[h].refs += 1
        handle = self._next
        self._next += 1
        self._nodes[handle] = _Node(op, tuple(inputs), tuple(args), dict(kwargs or {}))
        return handle

    def node(self, handle: int) -> _Node:
        return self._nodes[handle]

    def acquire(self, handle: int) -> None:
        self._nodes[handle].refs += 1

    def release(self, handle: int) -> None:
        """Drop one reference to *handle*, freeing nodes nothing reads anymore."""
        pending = [handle]
        while pending:
            h = pending.pop()
            node = self._nodes.get(h)
            if node is None:
                continue
            node.refs -= 1
            if node.refs > 0:
                continue
            del self._nodes[h]
            node.cached = None
            pending.extend(node.inputs)

    def evaluate(self, handle: int) -> np.ndarray:
        version = self.store.version
        root = self._nodes[handle]
        if root.cached_version == version:
            return root.cached

        stale = set()
        pending = [handle]
        while pending:
            h = pending.pop()
            if h in stale:
                continue
            node = self._nodes[h]
            if node.cached_version == version:
                continue
            stale.add(h)
            pending.extend(node.inputs)

        for h in sorted(stale):
            self._compute(self._nodes[h], version)
        logger.debug("recomputed %d node(s) for handle %d at version %d", len(stale), handle, version)
        return root.cached

    def _compute(self, node: _Node, version: int) -> None:
        n = len(self.store)
        ins = [self._nodes[h].cached for h in node.inputs]
        op = node.op

        if op is OpCode.FIELD:
            out = self.store.column(node.args[0])
        elif op is OpCode.VALUES:
            out = _fit(node.args[0], n)
        elif op is OpCode.CONSTANT:
            out = np.full(n, node.args[0], dtype=np.float64)
        elif op is OpCode.FOLD:
            from pandas_ta_series.stateful import replay
            kind, names = node.args
            out, _ = replay(kind, dict(zip(names, ins)), node.kwargs)
        elif op is OpCode.PICK:
            out = np.ascontiguousarray(ins[0][:, node.args[0]])
        elif op is OpCode.OFFSET:
            out = _shift(ins[0], node.args[0])
        elif op is OpCode.KERNEL:
            out = node.args[0](*ins, **node.kwargs)
        elif op in _UNARY:
            out = _UNARY[op](ins[0])
        else:
            out = _BINARY[op](ins[0], ins[1])

        out = np.asarray(out, dtype=np.float64)
        out.setflags(write=False)
        node.cached = out
        node.cached_version = version
        node.compute_count += 1


# ---------------------------------------------------------------------------
# Series handle
# ---------------------------------------------------------------------------

Operand = Union["Series", float, int]


class Series:
    """Handle to a lazily evaluated, bar-aligned float series.

    Combinators return new Series and never touch their operands. Values
    are produced on demand by ``to_array`` and friends and cached until the
    store's version moves.
    """

    __slots__ = ("arena", "handle", "__weakref__")

    def __init__(self, arena: SeriesArena, handle: int) -> None:
        self.arena = arena
        self.handle = handle
        arena.acquire(handle)
        weakref.finalize(self, arena.release, handle).atexit = False

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @staticmethod
    def _store_of(bars):
        from pandas_ta_series.bars import as_store
        return as_store(bars)

    @classmethod
    def from_bars(cls, bars, field: str = "close") -> "Series":
        """Leaf reading one bar field (``open``, ``high``, ..., ``volume``)."""
        if field not in BAR_FIELDS:
            raise ValueError(f"Unknown bar field '{field}', expected one of {BAR_FIELDS}")
        arena = cls._store_of(bars).arena
        return cls(arena, arena.add(OpCode.FIELD, args=(field,)))

    @classmethod
    def constant(cls, bars, value: float) -> "Series":
        arena = cls._store_of(bars).arena
        return cls(arena, arena.add(OpCode.CONSTANT, args=(float(value),)))

    @classmethod
    def from_array(cls, bars, values) -> "Series":
        """Leaf over fixed values, padded with NaN (or cut) to the bar count."""
        arena = cls._store_of(bars).arena
        data = np.array(values, dtype=np.float64)
        return cls(arena, arena.add(OpCode.VALUES, args=(data,), kwargs={"version": arena.store.version}))

    @classmethod
    def from_fold(cls, kind: str, inputs: Mapping[str, "Series"],
                  params: Optional[Dict[str, Any]] = None) -> Tuple["Series", ...]:
        """One Series per output of the registered stateful fold *kind*."""
        from pandas_ta_series.stateful import get_indicator

        indicator = get_indicator(kind)
        missing = [k for k in indicator.inputs if k not in inputs]
        if missing:
            raise ValueError(f"Indicator '{kind}' needs inputs {missing}")
        sources = [inputs[k] for k in indicator.inputs]
        arena = sources[0].arena
        for s in sources[1:]:
            arena = s._check_arena(arena)

        params = dict(params or {})
        fold = arena.add(
            OpCode.FOLD,
            inputs=[s.handle for s in sources],
            args=(kind, indicator.inputs),
            kwargs=params,
        )
        width = len(indicator.output_names(params))
        return tuple(cls(arena, arena.add(OpCode.PICK, inputs=(fold,), args=(j,))) for j in range(width))

    # ------------------------------------------------------------------
    # Graph building
    # ------------------------------------------------------------------
    @property
    def store(self):
        return self.arena.store

    def _check_arena(self, arena: SeriesArena) -> SeriesArena:
        if self.arena is not arena:
            raise ValueError("Cannot combine Series from different bar stores")
        return arena

    def _operand(self, other: Operand) -> "Series":
        if isinstance(other, Series):
            other._check_arena(self.arena)
            return other
        return Series(self.arena, self.arena.add(OpCode.CONSTANT, args=(float(other),)))

    def _unary(self, op: OpCode, args: Sequence[Any] = ()) -> "Series":
        return Series(self.arena, self.arena.add(op, inputs=(self.handle,), args=args))

    def _binary(self, op: OpCode, other: Operand, reflected: bool = False) -> "Series":
        other = self._operand(other)
        inputs = (other.handle, self.handle) if reflected else (self.handle, other.handle)
        return Series(self.arena, self.arena.add(op, inputs=inputs))

    def apply_kernel(self, fn: Callable[..., np.ndarray], *others: "Series", **kwargs: Any) -> "Series":
        """Node computing ``fn(self, *others, **kwargs)`` on the full arrays.

        *fn* must be causal: its value at bar i may only use inputs <= i.
        """
        for other in others:
            other._check_arena(self.arena)
        handles = [self.handle] + [o.handle for o in others]
        return Series(self.arena, self.arena.add(OpCode.KERNEL, inputs=handles, args=(fn,), kwargs=kwargs))

    # arithmetic
    def add(self, other: Operand) -> "Series":
        return self._binary(OpCode.ADD, other)

    def sub(self, other: Operand) -> "Series":
        return self._binary(OpCode.SUB, other)

    def mul(self, other: Operand) -> "Series":
        return self._binary(OpCode.MUL, other)

    def div(self, other: Operand) -> "Series":
        """Division; a zero divisor gives NaN."""
        return self._binary(OpCode.DIV, other)

    def mod(self, other: Operand) -> "Series":
        return self._binary(OpCode.MOD, other)

    def neg(self) -> "Series":
        return self._unary(OpCode.NEG)

    def abs(self) -> "Series":
        return self._unary(OpCode.ABS)

    def max_(self, other: Operand) -> "Series":
        return self._binary(OpCode.MAX2, other)

    def min_(self, other: Operand) -> "Series":
        return self._binary(OpCode.MIN2, other)

    # comparisons
    def gt(self, other: Operand) -> "Series":
        return self._binary(OpCode.GT, other)

    def ge(self, other: Operand) -> "Series":
        return self._binary(OpCode.GE, other)

    def lt(self, other: Operand) -> "Series":
        return self._binary(OpCode.LT, other)

    def le(self, other: Operand) -> "Series":
        return self._binary(OpCode.LE, other)

    def eq(self, other: Operand) -> "Series":
        return self._binary(OpCode.EQ, other)

    def ne(self, other: Operand) -> "Series":
        return self._binary(OpCode.NE, other)

    # boolean
    def and_(self, other: Operand) -> "Series":
        return self._binary(OpCode.AND, other)

    def or_(self, other: Operand) -> "Series":
        return self._binary(OpCode.OR, other)

    def not_(self) -> "Series":
        return self._unary(OpCode.NOT)

    def offset(self, n: int) -> "Series":
        """Value this series had *n* bars earlier; NaN before the first bar."""
        n = int(n)
        if n < 0:
            raise ValueError(f"offset must be >= 0, got {n}")
        return self._unary(OpCode.OFFSET, args=(n,))

    # windows
    def sum(self, length: int) -> "Series":
        return self.apply_kernel(kernels.window_sum, length=kernels.check_length(length))

    def sma(self, length: int) -> "Series":
        return self.apply_kernel(kernels.sma, length=kernels.check_length(length))

    def ema(self, length: int) -> "Series":
        return self.apply_kernel(kernels.ema, length=kernels.check_length(length))

    def rma(self, length: int) -> "Series":
        return self.apply_kernel(kernels.rma, length=kernels.check_length(length))

    def wma(self, length: int) -> "Series":
        return self.apply_kernel(kernels.wma, length=kernels.check_length(length))

    def stdev(self, length: int) -> "Series":
        return self.apply_kernel(kernels.stdev, length=kernels.check_length(length))

    def variance(self, length: int, biased: bool = True) -> "Series":
        return self.apply_kernel(kernels.variance, length=kernels.check_length(length), biased=biased)

    def highest(self, length: int) -> "Series":
        return self.apply_kernel(kernels.highest, length=kernels.check_length(length))

    def lowest(self, length: int) -> "Series":
        return self.apply_kernel(kernels.lowest, length=kernels.check_length(length))

    def linreg(self, length: int, offset: int = 0) -> "Series":
        return self.apply_kernel(kernels.linreg, length=kernels.check_length(length), offset=int(offset))

    def change(self, length: int = 1) -> "Series":
        return self.apply_kernel(kernels.change, length=kernels.check_length(length))

    # operators; equality stays identity so Series remain hashable
    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div
    __mod__ = mod
    __neg__ = neg
    __abs__ = abs
    __gt__ = gt
    __ge__ = ge
    __lt__ = lt
    __le__ = le
    __and__ = and_
    __or__ = or_
    __invert__ = not_

    def __radd__(self, other: Operand) -> "Series":
        return self._binary(OpCode.ADD, other, reflected=True)

    def __rsub__(self, other: Operand) -> "Series":
        return self._binary(OpCode.SUB, other, reflected=True)

    def __rmul__(self, other: Operand) -> "Series":
        return self._binary(OpCode.MUL, other, reflected=True)

    def __rtruediv__(self, other: Operand) -> "Series":
        return self._binary(OpCode.DIV, other, reflected=True)

    def __rmod__(self, other: Operand) -> "Series":
        return self._binary(OpCode.MOD, other, reflected=True)

    def __rand__(self, other: Operand) -> "Series":
        return self._binary(OpCode.AND, other, reflected=True)

    def __ror__(self, other: Operand) -> "Series":
        return self._binary(OpCode.OR, other, reflected=True)

    def __bool__(self) -> bool:
        raise TypeError("The truth value of a Series is ambiguous; use last() or to_array()")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @property
    def _node(self) -> _Node:
        return self.arena.node(self.handle)

    @property
    def compute_count(self) -> int:
        """How many times this node has been (re)computed."""
        return self._node.compute_count

    @property
    def is_stale(self) -> bool:
        """True for a fixed-value series whose data predates the store's version."""
        node = self._node
        return node.op is OpCode.VALUES and node.kwargs.get("version") != self.store.version

    def to_array(self) -> np.ndarray:
        """Dense read-only float64 array, one value per bar."""
        node = self._node
        if node.op is OpCode.VALUES and node.kwargs.get("materialized") and self.is_stale \
                and not node.kwargs.get("warned"):
            node.kwargs["warned"] = True
            warnings.warn(
                f"materialized series read at version {self.store.version}, "
                f"values were taken at version {node.kwargs['version']}",
                stacklevel=2,
            )
        return self.arena.evaluate(self.handle)

    def __len__(self) -> int:
        return len(self.store)

    def __repr__(self) -> str:
        return f"Series(op={self._node.op.value}, handle={self.handle}, bars={len(self.store)})"

    def get(self, index: int) -> float:
        """Value at bar *index*; NaN outside ``[0, len)``."""
        values = self.to_array()
        if index < 0 or index >= values.size:
            return np.nan
        return float(values[index])

    def last(self) -> float:
        values = self.to_array()
        return float(values[-1]) if values.size else np.nan

    def to_time_value_pairs(self) -> List[Tuple[Any, float]]:
        """``(time, value)`` for every bar with a defined value."""
        values = self.to_array()
        bars = self.store.snapshot()
        return [(bars[i].time, float(v)) for i, v in enumerate(values) if not np.isnan(v)]

    def to_series(self, name: Optional[str] = None):
        """pandas Series indexed by bar time."""
        import pandas as pd

        index = pd.Index([b.time for b in self.store.snapshot()], name="time")
        return pd.Series(self.to_array().copy(), index=index, name=name)

    def materialize(self) -> "Series":
        """Detach the current values into a leaf with no parent references.

        The copy is frozen at the current version: later store mutations pad
        it with NaN (or cut it) but never recompute it; ``is_stale`` reports
        when that happened.
        """
        values = self.to_array().copy()
        version = self.store.version
        handle = self.arena.add(OpCode.VALUES, args=(values,),
                                kwargs={"version": version, "materialized": True})
        logger.debug("materialized handle %d -> %d at version %d", self.handle, handle, version)
        return Series(self.arena, handle)


def kernel(fn: Callable[..., np.ndarray], *series: Series, **kwargs: Any) -> Series:
    """Multi-input kernel node, e.g. ``kernel(kernels.atr, high, low, close, length=14)``."""
    if not series:
        raise ValueError("kernel() needs at least one input Series")
    return series[0].apply_kernel(fn, *series[1:], **kwargs)
