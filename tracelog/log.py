"""Process-wide default facade.

Import this where passing a facade around is not worth it:

    from tracelog.log import log
    log.configure()
    log.info("Startup", "Loaded {0} rules", 5)

`log` is built from environment settings (see `TelemetrySettings.from_env`)
and the module-level callables below are bound to it.
"""

from tracelog.facade import LogFacade
from tracelog.settings import TelemetrySettings

log = LogFacade(TelemetrySettings.from_env())

configure = log.configure
verbose = log.verbose
info = log.info
warning = log.warning
warn = log.warn
error = log.error
flush = log.flush
