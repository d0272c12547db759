"""
modpak - Minecraft 整合包管理工具

从 Modrinth 与 CurseForge 解析模组及其依赖，生成客户端 .mrpack 与服务端压缩包。
"""

__version__ = "0.1.0"
