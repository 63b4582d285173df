"""Status components and the helpers they use."""