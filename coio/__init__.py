from .call import call as call
from .call import coroutine as coroutine
from .coroutine import Coroutine as Coroutine
from .coroutine import InvalidYieldError as InvalidYieldError
from .loop import Loop as Loop
from .promise import Deferred as Deferred
from .promise import Failure as Failure
from .promise import Promise as Promise
from .promise import Success as Success
from .wait import wait as wait
