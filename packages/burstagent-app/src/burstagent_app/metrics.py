from prometheus_client import Counter, Histogram, start_http_server

# 模型调用
model_api_failure_count = Counter("model_api_failure_count", "Number of Model API failures")
model_api_success_count = Counter("model_api_success_count", "Number of Model API success")

# 草稿
draft_update_count = Counter("burst_draft_update_count", "Number of persisted draft updates")
draft_cancel_count = Counter("burst_draft_cancel_count", "Number of cancelled drafts")
draft_store_failure_count = Counter("burst_draft_store_failure_count", "Number of failed draft writes")

# 发币
launch_success_count = Counter("burst_launch_success_count", "Number of launched burst tokens")
launch_failure_count = Counter("burst_launch_failure_count", "Number of failed burst token launches", ["reason"])
pinning_failure_count = Counter("pinning_failure_count", "Number of failed IPFS uploads")
launch_duration = Histogram("burst_launch_duration_seconds", "Burst token launch duration")

api_requests_total = Counter("api_requests_total", "Total API requests", ["endpoint", "status"])

start_server = start_http_server
