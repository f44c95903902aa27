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

import inspect
import logging

logger = logging.getLogger("funchero")
logger.setLevel(logging.WARNING)
console_handler = logging.StreamHandler()
formatter = logging.Formatter("==> %(levelname)s: %(message)s")
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)


_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY,
               inspect.Parameter.POSITIONAL_OR_KEYWORD)
_BY_KEYWORD = (inspect.Parameter.POSITIONAL_OR_KEYWORD,
               inspect.Parameter.KEYWORD_ONLY)


def positionals(func):
    '''Names of the positional parameters of func that `curry` waits for.

    Counting stops at the first parameter with a default value, so

    >>> positionals(lambda a, b, c=1, *args, d: None)
    ('a', 'b')
    '''
    names = []
    for param in inspect.signature(func).parameters.values():
        if param.kind not in _POSITIONAL or param.default is not param.empty:
            break
        names.append(param.name)
    return tuple(names)


def arity(func):
    '''Declared arity of func: how many positional arguments it requires
    before the first defaulted one.

    >>> arity(lambda a, b: None)
    2
    >>> arity(lambda a, b=2: None)
    1
    >>> arity(lambda *args: None)
    0

    Raises TypeError when the signature of func can't be introspected.
    '''
    try:
        return len(positionals(func))
    except ValueError:
        raise TypeError('Can\'t determine arity of {!r}, pass it '
                        'explicitly'.format(func)) from None


def remaining(func, args, keywords):
    '''Signature of func once args and keywords are bound.

    Leading positional parameters taken by args go away, parameters given
    by keyword become keyword-only with the supplied value as default:

    >>> remaining(lambda a, b, c, *rest: None, (1,), {'c': 3})
    <Signature (b, *rest, c=3)>

    Callables that can't be introspected give an empty signature.
    '''
    try:
        params = inspect.signature(func).parameters.values()
    except ValueError:
        return inspect.Signature()
    skip = len(args)
    rest = []
    for param in params:
        if skip and param.kind in _POSITIONAL:
            skip -= 1
            continue
        if param.name in keywords and param.kind in _BY_KEYWORD:
            param = param.replace(kind=param.KEYWORD_ONLY,
                                  default=keywords[param.name])
        rest.append(param)
    return inspect.Signature(sorted(rest, key=lambda p: p.kind))
