from serverless.lambda_function import handler, make_handler
