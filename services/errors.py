"""문의(询价) 저장소 예외: app.py 의 errorhandler 가 HTTP 응답으로 변환"""


class InquiryError(Exception):
    status_code = 500
    message = "服务器内部错误"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(InquiryError):
    """요청 필드 검증 실패. errors 는 [{field, message}] 목록."""

    status_code = 400
    message = "参数验证失败"

    def __init__(self, errors, message=None):
        super().__init__(message)
        self.errors = list(errors)


class NotFoundError(InquiryError):
    status_code = 404
    message = "询价记录不存在"


class InvalidArgumentError(InquiryError):
    status_code = 400
    message = "无效的批量操作"


class PersistenceError(InquiryError):
    status_code = 500
    message = "数据保存失败"
