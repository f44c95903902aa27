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
Function combinators for building pipelines of unary functions.

>>> from funchero import curry, compose, tap
>>> add = curry(lambda a, b, c: a + b + c)
>>> add(1)(2)(3) == add(1, 2)(3) == add(1, 2, 3) == 6
True
>>> compose(str, lambda x: x * 2, tap(print))(21)
21
'42'
'''

from functools import update_wrapper

from .utils import (arity as _arity, positionals as _positionals,
                    remaining as _remaining, logger)


def identity(x):
    return x


class _Curried(object):
    '''Partial application record: target function, its arity and the
    arguments supplied so far. Every call builds a new record or fires.'''

    def __init__(self, func, args, keywords, arity, names):
        # before our own attributes, update_wrapper copies func.__dict__
        update_wrapper(self, func)
        self._func = func
        self._args = args
        self._keywords = keywords
        self._arity = arity
        self._names = names

    @property
    def func(self):
        return self._func

    @property
    def args(self):
        return self._args

    @property
    def keywords(self):
        return dict(self._keywords)

    @property
    def __signature__(self):
        # only what is still missing, so curry() of a record counts that
        return _remaining(self._func, self._args, self._keywords)

    def _supplied(self, args, keywords):
        # keywords only count for required parameters not taken positionally
        pending = self._names[len(args):self._arity]
        return len(args) + sum(1 for name in pending if name in keywords)

    def __call__(self, *args, **kwargs):
        args = self._args + args
        keywords = dict(self._keywords, **kwargs)
        if self._supplied(args, keywords) >= self._arity:
            return self._func(*args, **keywords)
        return _Curried(self._func, args, keywords, self._arity, self._names)

    def __repr__(self):
        if isinstance(self._func, _Curried):
            name = repr(self._func)
        else:
            name = getattr(self._func, '__name__', None) or repr(self._func)
        supplied = [repr(a) for a in self._args]
        supplied.extend('{}={!r}'.format(k, v)
                        for k, v in self._keywords.items())
        return 'curry({})'.format(', '.join([name] + supplied))


def curry(func, initial_args=(), arity=None):
    '''Return curried version of func.

    The curried function accepts any number of arguments per call and
    fires func once the arguments supplied so far reach its arity, the
    count of positional parameters without a default. Until then each
    call returns a new curried function holding the accumulated
    arguments. Extra arguments in the firing call are passed through.

    >>> def volume(w, h, d):
    ...     return w * h * d
    >>> cube = curry(volume)
    >>> cube(2)(3)(4), cube(2, 3)(4), cube(2)(3, 4), cube(2, 3, 4)
    (24, 24, 24, 24)
    >>> cube(2, 3)
    curry(volume, 2, 3)
    >>> curry(volume, (2, 3))(d=4)
    24

    `arity` overrides the introspected one and is needed for callables
    without an inspectable signature:

    >>> curry(max, arity=3)(1)(5)(3)
    5
    '''
    if arity is None:
        arity = _arity(func)
        names = _positionals(func)
    else:
        logger.debug('curry: arity of %r set to %d', func, arity)
        try:
            names = _positionals(func)
        except ValueError:
            names = ()
    return _Curried(func, tuple(initial_args), {}, arity, names)


def compose(*funcs):
    '''Return composition of funcs, applied right to left.

    >>> compose(str, lambda x: x + 1)(1)
    '2'
    >>> compose()('unchanged')
    'unchanged'
    '''
    if not funcs:
        return identity
    if len(funcs) == 1:
        return funcs[0]

    def _(x):
        for func in reversed(funcs):
            x = func(x)
        return x
    return _


def identify(func):
    '''Call func with no arguments and pass the value through.

    >>> identify(lambda: print('step'))(42)
    step
    42
    '''
    def _(x):
        func()
        return x
    return _


def tap(func):
    '''Call func with the value and pass the value through.

    >>> tap(print)('hello')
    hello
    'hello'
    '''
    def _(x):
        func(x)
        return x
    return _


def alt(*funcs):
    '''Apply every func to the value and return the first truthy result,
    or None if there is none. All funcs run, there's no short circuit.

    >>> alt(lambda x: 0, lambda x: x * 2, lambda x: x * 3)(5)
    10
    >>> alt(lambda x: None, bool)(0) is None
    True
    '''
    def _(x):
        results = [func(x) for func in funcs]
        return next(filter(None, results), None)
    return _


def seq(*funcs):
    'Apply every func to the value in order, for side effects only'
    def _(x):
        for func in funcs:
            func(x)
    return _


def fork(join, *funcs):
    '''Feed the value to every func and join the results.

    >>> fork(lambda a, b: a / b, sum, len)([1, 2, 3, 6])
    3.0
    '''
    def _(x):
        return join(*[func(x) for func in funcs])
    return _


def safe(alt, func):
    '''Apply func to the value, on exception return alt(exception).

    >>> safe(repr, int)('12')
    12
    >>> safe(lambda e: -1, int)('twelve')
    -1
    '''
    def _(x):
        try:
            return func(x)
        except Exception as e:
            logger.debug('safe: %r raised %r, handing it to %r', func, e, alt)
            return alt(e)
    return _


from .deferred import promising, cthen, ccatch

cThen = cthen
cCatch = ccatch

__all__ = [
    'curry',
    'compose',
    'identity',
    'identify',
    'tap',
    'alt',
    'seq',
    'fork',
    'safe',
    'promising',
    'cthen',
    'ccatch',
    'cThen',
    'cCatch',
]
