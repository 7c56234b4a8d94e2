"""
cfgstore 日志

存储核心（ConfigStore）不记录日志；上层服务通过 get_logger 记录
配置的创建、复用和失败。输出目标由宿主应用的 logging 配置决定。
"""

import logging


class StoreLogger:
    """
    标准 logging 的薄封装

    增加 success 级别（25，介于 INFO 和 WARNING 之间），
    用于区分"配置文件已创建"与普通的 info 消息。
    """

    SUCCESS_LEVEL = 25

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        if logging.getLevelName(self.SUCCESS_LEVEL) != 'SUCCESS':
            logging.addLevelName(self.SUCCESS_LEVEL, 'SUCCESS')

    def info(self, message: str):
        self.logger.info(message)

    def success(self, message: str):
        self.logger.log(self.SUCCESS_LEVEL, message)

    def error(self, message: str):
        self.logger.error(message)


def get_logger(name: str) -> StoreLogger:
    """获取日志器（通常传入 __name__）"""
    return StoreLogger(name)
