from idhunt.net.dispatcher import HttpDispatcher, build_url

__all__ = ["HttpDispatcher", "build_url"]
