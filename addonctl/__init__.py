"""addonctl - 单节点 OpenShift 集群的 add-on 管理工具"""

__version__ = "0.4.0"
