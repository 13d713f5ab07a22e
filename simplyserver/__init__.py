from .core import DEFAULT_CFG, Handler, ServerCfg, ServerError, build_server, serve

__all__ = ["DEFAULT_CFG", "Handler", "ServerCfg", "ServerError", "build_server", "serve"]
