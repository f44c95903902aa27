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

'''
Bridges from plain functions to asyncio futures.

`promising` turns a synchronous function into one returning a future,
`cthen` and `ccatch` register continuations on futures (or any other
awaitable) and are curried, so they drop straight into a `compose`
pipeline:

    >>> import asyncio
    >>> from funchero import compose, promising, cthen, ccatch
    >>> async def main():
    ...     parse = compose(ccatch(lambda e: 0), cthen(abs), promising(int))
    ...     return await parse('-7'), await parse('seven')
    >>> asyncio.run(main())
    (7, 0)
'''

import asyncio
import inspect

from . import compose, curry, safe
from .utils import logger


def _reject(future, e):
    'Reject future with e, futures refuse StopIteration so it gets wrapped'
    if isinstance(e, StopIteration):
        wrapped = RuntimeError('function raised StopIteration')
        wrapped.__cause__ = e
        e = wrapped
    future.set_exception(e)


def _rejecter(future):
    def reject(e):
        logger.debug('promising: rejecting %r with %r', future, e)
        _reject(future, e)
    return reject


def promising(func):
    '''Return a function that calls func and wraps the outcome in a future.

    func runs right away, the future is resolved with its result or
    rejected with the exception it raised. Needs a running event loop.
    '''
    def _(param):
        future = asyncio.get_running_loop().create_future()
        safe(_rejecter(future), compose(future.set_result, func))(param)
        return future
    return _


def _copy_state(source, target):
    if target.done():
        return
    if source.cancelled():
        target.cancel()
    elif source.exception() is not None:
        target.set_exception(source.exception())
    else:
        target.set_result(source.result())


def _settle(target, func, value):
    'Settle target with func(value), following it when it is awaitable'
    try:
        result = func(value)
    except Exception as e:
        _reject(target, e)
        return
    if inspect.isawaitable(result):
        asyncio.ensure_future(result).add_done_callback(
            lambda inner: _copy_state(inner, target))
    else:
        target.set_result(result)


def _continue(promise, on_result, on_error):
    source = asyncio.ensure_future(promise)
    target = source.get_loop().create_future()

    def _done(source):
        if target.done():
            return
        if source.cancelled():
            target.cancel()
        elif source.exception() is not None:
            on_error(target, source.exception())
        else:
            on_result(target, source.result())

    source.add_done_callback(_done)
    return target


@curry
def cthen(func, promise):
    '''Future settled with func(result) once promise is fulfilled.

    A rejection of promise passes through without calling func.
    '''
    return _continue(promise,
                     lambda target, value: _settle(target, func, value),
                     lambda target, e: target.set_exception(e))


@curry
def ccatch(func, promise):
    '''Future settled with func(exception) once promise is rejected.

    A fulfilled promise passes its result through without calling func.
    '''
    return _continue(promise,
                     lambda target, value: target.set_result(value),
                     lambda target, e: _settle(target, func, e))
