class NotReadyError(Exception):
    """
    数据尚未就绪

    当LuckPerms尚未初始化、请求的用户/权限组不存在，或数据集为空（仅元数据）时抛出。
    宿主渲染管线捕获该异常后将对应的显示元素视为缺失/等待中。
    """

    def __init__(self, message: str = "Data is not ready yet"):
        super().__init__(message)
