# Copyright 2017 Daniel Hilst Selli
# 
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
# 
#     http://www.apache.org/licenses/LICENSE-2.0
# 
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License. 
# 

import asyncio
import doctest
import logging
import operator
import unittest

from . import (curry, compose, identity, identify, tap, alt, seq, fork, safe,
               promising, cthen, ccatch, cThen, cCatch)
from . import deferred, utils
import funchero


def load_tests(loader, tests, ignore):
    for module in (funchero, deferred, utils):
        tests.addTests(doctest.DocTestSuite(module))
    return tests


class Recorder(object):
    'Callable that remembers the arguments of each call'

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        return self.result


class TestCurry(unittest.TestCase):
    def setUp(self):
        self.add3 = curry(lambda a, b, c: (a, b, c))

    def test_partitions(self):
        ae = self.assertEqual
        expected = (1, 2, 3)

        ae(self.add3(1)(2)(3), expected)
        ae(self.add3(1, 2)(3), expected)
        ae(self.add3(1)(2, 3), expected)
        ae(self.add3(1, 2, 3), expected)

    def test_partial_returns_callable(self):
        partial = self.add3(1)
        self.assertTrue(callable(partial))
        self.assertTrue(callable(partial(2)))
        self.assertEqual(partial.args, (1,))

    def test_empty_call_keeps_waiting(self):
        self.assertEqual(self.add3()()(1)()(2, 3), (1, 2, 3))

    def test_records_are_immutable(self):
        one = self.add3(1)
        self.assertEqual(one(2, 3), (1, 2, 3))
        self.assertEqual(one(4)(5), (1, 4, 5))
        self.assertEqual(one.args, (1,))

    def test_extra_arguments_are_passed(self):
        collect = curry(lambda a, b, *rest: (a, b) + rest)
        self.assertEqual(collect(1)(2, 3, 4), (1, 2, 3, 4))

    def test_zero_arity_fires_immediately(self):
        rec = Recorder('fired')
        self.assertEqual(curry(lambda: rec())(), 'fired')
        self.assertEqual(len(rec.calls), 1)

    def test_never_fires_early(self):
        rec = Recorder()
        fn = curry(lambda a, b, c: rec(a, b, c))
        fn(1)(2)
        self.assertEqual(rec.calls, [])
        fn(1)(2)(3)
        self.assertEqual(rec.calls, [(1, 2, 3)])

    def test_initial_args(self):
        self.assertEqual(curry(lambda a, b, c: (a, b, c), [1, 2])(3),
                         (1, 2, 3))

    def test_defaults_are_not_counted(self):
        fn = curry(lambda a, b=10: a + b)
        self.assertEqual(fn(1), 11)

    def test_keywords(self):
        fn = curry(lambda a, b, c: (a, b, c))
        self.assertEqual(fn(1)(c=3)(2), (1, 2, 3))
        self.assertEqual(fn(1, c=3)(b=2), (1, 2, 3))
        self.assertEqual(fn(1, c=3).keywords, {'c': 3})

    def test_explicit_arity(self):
        self.assertEqual(curry(operator.add, arity=2)(1)(2), 3)
        self.assertEqual(curry(max, arity=2)(1)(4), 4)

    def test_unknown_arity(self):
        self.assertRaises(TypeError, curry, max)

    def test_errors_propagate(self):
        fn = curry(lambda a, b: a / b)
        self.assertRaises(ZeroDivisionError, fn(1), 0)

    def test_curry_of_curried(self):
        twice = curry(curry(lambda a, b: (a, b)))
        self.assertEqual(twice(1)(2), (1, 2))
        self.assertEqual(twice(1).args, (1,))

    def test_curry_of_partial(self):
        one = self.add3(1)
        self.assertEqual(utils.arity(one), 2)
        self.assertEqual(curry(one)(2)(3), (1, 2, 3))
        self.assertEqual(curry(one)(2, 3), (1, 2, 3))

    def test_curry_of_keyword_partial(self):
        fn = curry(lambda a, b, c: (a, b, c))
        self.assertEqual(utils.arity(fn(c=3)), 2)
        self.assertEqual(curry(fn(c=3))(1)(2), (1, 2, 3))

    def test_repr_of_nested(self):
        nested = curry(self.add3(1))(2)
        self.assertEqual(repr(nested), 'curry(curry(<lambda>, 1), 2)')

    def test_decorator(self):
        @curry
        def greet(greeting, name):
            'Greet somebody'
            return '{}, {}!'.format(greeting, name)

        self.assertEqual(greet('Hello')('world'), 'Hello, world!')
        self.assertEqual(greet.__name__, 'greet')
        self.assertEqual(greet.__doc__, 'Greet somebody')
        self.assertEqual(repr(greet('Hi')), "curry(greet, 'Hi')")


class TestCompose(unittest.TestCase):
    def test_right_to_left(self):
        f = lambda x: x + 1
        g = lambda x: x * 2
        for x in (-3, 0, 7):
            self.assertEqual(compose(f, g)(x), f(g(x)))
            self.assertEqual(compose(g, f)(x), g(f(x)))

    def test_empty(self):
        sentinel = object()
        self.assertIs(compose()(sentinel), sentinel)
        self.assertIs(compose(), identity)

    def test_single(self):
        self.assertIs(compose(len), len)

    def test_error_stops_pipeline(self):
        rec = Recorder()
        pipeline = compose(rec, lambda x: 1 / x)
        self.assertRaises(ZeroDivisionError, pipeline, 0)
        self.assertEqual(rec.calls, [])

    def test_long_pipeline(self):
        inc = lambda x: x + 1
        self.assertEqual(compose(*[inc] * 5000)(0), 5000)

    def test_with_curried(self):
        add = curry(lambda a, b: a + b)
        self.assertEqual(compose(add(1), add(10))(100), 111)


class TestSideEffects(unittest.TestCase):
    def test_tap(self):
        value = object()
        rec = Recorder('ignored')
        self.assertIs(tap(rec)(value), value)
        self.assertEqual(rec.calls, [(value,)])

    def test_identify(self):
        value = object()
        rec = Recorder('ignored')
        self.assertIs(identify(rec)(value), value)
        self.assertEqual(rec.calls, [()])

    def test_errors_propagate(self):
        def boom(*args):
            raise KeyError('boom')
        self.assertRaises(KeyError, tap(boom), 1)
        self.assertRaises(KeyError, identify(boom), 1)


class TestAlt(unittest.TestCase):
    def test_first_truthy(self):
        f1, f2, f3 = Recorder(0), Recorder(5), Recorder(7)
        self.assertEqual(alt(f1, f2, f3)('x'), 5)
        for rec in (f1, f2, f3):
            self.assertEqual(rec.calls, [('x',)])

    def test_none_truthy(self):
        falsy = [Recorder(v) for v in (None, False, 0, '', [], {})]
        self.assertIsNone(alt(*falsy)(1))
        for rec in falsy:
            self.assertEqual(rec.calls, [(1,)])
        self.assertIsNone(alt()(1))

    def test_error_aborts(self):
        def boom(x):
            raise ValueError(x)
        rec = Recorder(1)
        self.assertRaises(ValueError, alt(boom, rec), 1)
        self.assertEqual(rec.calls, [])


class TestSeq(unittest.TestCase):
    def test_order(self):
        log = []
        def marker(m):
            return lambda x: log.append((m, x))
        self.assertIsNone(seq(marker(1), marker(2), marker(3))('x'))
        self.assertEqual(log, [(1, 'x'), (2, 'x'), (3, 'x')])

    def test_fail_fast(self):
        log = []
        def boom(x):
            raise RuntimeError(x)
        run = seq(log.append, boom, log.append)
        self.assertRaises(RuntimeError, run, 'x')
        self.assertEqual(log, ['x'])


class TestFork(unittest.TestCase):
    def test_join(self):
        f1 = lambda x: x * 2
        f2 = lambda x: x - 1
        for x in (0, 3, -4):
            self.assertEqual(fork(operator.add, f1, f2)(x), f1(x) + f2(x))

    def test_results_in_call_order(self):
        joined = fork(lambda *r: r, len, sum, max)([3, 1, 2])
        self.assertEqual(joined, (3, 6, 3))

    def test_errors_propagate(self):
        rec = Recorder()
        self.assertRaises(ZeroDivisionError,
                          fork(rec, lambda x: 1 / x), 0)
        self.assertEqual(rec.calls, [])


class TestSafe(unittest.TestCase):
    def test_success(self):
        self.assertEqual(safe(Recorder('alt'), int)('3'), 3)

    def test_recovery(self):
        error = ValueError('nope')
        def fails(x):
            raise error
        rec = Recorder('recovered')
        self.assertEqual(safe(rec, fails)(1), 'recovered')
        self.assertEqual(rec.calls, [(error,)])

    def test_alt_errors_propagate(self):
        def fails(x):
            raise ValueError(x)
        def alt_fails(e):
            raise KeyError('alt')
        self.assertRaises(KeyError, safe(alt_fails, fails), 1)

    def test_base_exceptions_pass(self):
        def interrupted(x):
            raise KeyboardInterrupt
        self.assertRaises(KeyboardInterrupt,
                          safe(Recorder(), interrupted), 1)

    def test_logs_recovery(self):
        previous = utils.logger.level
        utils.logger.setLevel(logging.DEBUG)
        try:
            with self.assertLogs('funchero', logging.DEBUG) as cm:
                safe(identity, int)('x')
        finally:
            utils.logger.setLevel(previous)
        self.assertIn('safe:', cm.output[0])


class TestDeferred(unittest.IsolatedAsyncioTestCase):
    async def test_promising_resolves(self):
        future = promising(lambda x: x * 2)(21)
        self.assertIsInstance(future, asyncio.Future)
        self.assertEqual(await future, 42)

    async def test_promising_rejects(self):
        error = ValueError('bad')
        def fails(x):
            raise error
        future = promising(fails)(1)
        with self.assertRaises(ValueError) as cm:
            await future
        self.assertIs(cm.exception, error)

    async def test_promising_runs_eagerly(self):
        rec = Recorder()
        promising(rec)('now')
        self.assertEqual(rec.calls, [('now',)])

    async def test_promising_stop_iteration(self):
        future = promising(lambda x: next(iter(x)))([])
        with self.assertRaises(RuntimeError) as cm:
            await future
        self.assertIsInstance(cm.exception.__cause__, StopIteration)

    async def test_then(self):
        self.assertEqual(await cthen(len, promising(identity)('abc')), 3)

    async def test_then_curried(self):
        double = cthen(lambda x: x * 2)
        self.assertTrue(callable(double))
        self.assertEqual(await double(promising(identity)(4)),
                         await cthen(lambda x: x * 2, promising(identity)(4)))

    async def test_then_skips_rejection(self):
        rec = Recorder()
        future = cthen(rec, promising(int)('x'))
        with self.assertRaises(ValueError):
            await future
        self.assertEqual(rec.calls, [])

    async def test_then_error_rejects(self):
        future = cthen(lambda x: 1 / x, promising(identity)(0))
        with self.assertRaises(ZeroDivisionError):
            await future

    async def test_then_stop_iteration(self):
        future = cthen(lambda x: next(iter(x)), promising(identity)([]))
        with self.assertRaises(RuntimeError) as cm:
            await asyncio.wait_for(future, 1)
        self.assertIsInstance(cm.exception.__cause__, StopIteration)

    async def test_catch_stop_iteration(self):
        future = ccatch(lambda e: next(iter(())), promising(int)('x'))
        with self.assertRaises(RuntimeError):
            await asyncio.wait_for(future, 1)

    async def test_then_flattens_awaitables(self):
        async def later(x):
            await asyncio.sleep(0)
            return x + 1
        self.assertEqual(await cthen(later, promising(identity)(1)), 2)

    async def test_then_accepts_coroutines(self):
        async def value():
            return 'v'
        self.assertEqual(await cthen(str.upper, value()), 'V')

    async def test_catch(self):
        recovered = ccatch(lambda e: type(e).__name__, promising(int)('x'))
        self.assertEqual(await recovered, 'ValueError')

    async def test_catch_passes_results(self):
        rec = Recorder()
        self.assertEqual(await ccatch(rec)(promising(int)('5')), 5)
        self.assertEqual(rec.calls, [])

    async def test_continuations_run_later(self):
        log = []
        future = cthen(log.append, promising(identity)('settled'))
        log.append('sync')
        await future
        self.assertEqual(log, ['sync', 'settled'])

    async def test_registration_order(self):
        log = []
        source = promising(identity)(1)
        first = cthen(lambda x: log.append(('first', x)), source)
        second = cthen(lambda x: log.append(('second', x)), source)
        await asyncio.gather(first, second)
        self.assertEqual(log, [('first', 1), ('second', 1)])

    async def test_cancellation_propagates(self):
        source = asyncio.get_running_loop().create_future()
        derived = cthen(identity, source)
        source.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await derived

    async def test_pipeline(self):
        parse = compose(ccatch(lambda e: -1), cthen(abs), promising(int))
        self.assertEqual(await parse('-3'), 3)
        self.assertEqual(await parse('three'), -1)

    async def test_aliases(self):
        self.assertIs(cThen, cthen)
        self.assertIs(cCatch, ccatch)


class TestUtils(unittest.TestCase):
    def test_arity(self):
        class Thing(object):
            def method(self, a, b):
                pass
        self.assertEqual(utils.arity(Thing().method), 2)
        self.assertEqual(utils.arity(lambda a, *, b: None), 1)
        self.assertEqual(utils.arity(lambda a, b=1, c=2: None), 1)

    def test_remaining(self):
        sig = utils.remaining(lambda a, b, c: None, (1,), {'c': 3})
        self.assertEqual(list(sig.parameters), ['b', 'c'])
        self.assertEqual(sig.parameters['c'].default, 3)
        self.assertEqual(len(utils.remaining(max, (), {}).parameters), 0)

    def test_arity_of_builtin(self):
        self.assertRaises(TypeError, utils.arity, max)
