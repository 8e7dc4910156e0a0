SERVICE_NAME = "line-slack-relay"
