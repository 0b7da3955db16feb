"""Follow service: who follows whom."""