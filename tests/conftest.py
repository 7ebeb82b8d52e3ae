import os

# 디스플레이 없는 환경(CI)에서도 Qt 위젯 테스트 가능하도록
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
