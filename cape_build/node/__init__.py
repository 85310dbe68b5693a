from cape_build.node.server import LocalNodeServer, ServerHandle, start_node

__all__ = ["LocalNodeServer", "ServerHandle", "start_node"]
